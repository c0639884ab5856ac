"""Live session service: scheduling and the session lifecycle.

Status changes go through ``LIVE_SESSION_LIFECYCLE``; this module only adds
the timestamps and schedule checks that accompany each transition.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.exceptions import BadRequestError, NotFoundError
from dentalportal.lifecycle import LIVE_SESSION_LIFECYCLE, SessionAction
from dentalportal.live_sessions.schemas import (
    CreateLiveSessionRequest,
    LiveSessionFilters,
    LiveSessionStatistics,
    to_utc,
)
from dentalportal.models.base import as_utc, utcnow
from dentalportal.models.enums import LiveSessionStatus
from dentalportal.models.live_session import LiveSession
from dentalportal.pagination import (
    SEARCH_RESULT_CAP,
    ListParams,
    SortOrder,
    apply_filters,
    order_clause,
    paginate,
    search_clause,
)
from dentalportal.policy import ensure_can_modify, ensure_visible
from dentalportal.slugs import flush_guarding_slug, resolve_slug
from shared.models.pagination import PageMeta
from shared.models.user import CurrentUser

logger = logging.getLogger(__name__)

RESOURCE = "Live session"
SORTABLE_FIELDS = (
    "scheduled_at", "created_at", "updated_at", "title", "duration_minutes",
    "view_count", "registration_count",
)
SEARCH_COLUMNS = (
    LiveSession.title, LiveSession.description, LiveSession.topic, LiveSession.category,
)
REQUIRED_FIELDS = (
    "title", "description", "tags", "scheduled_at", "timezone", "duration_minutes",
    "is_recorded", "materials", "is_active",
)


def _ensure_future(scheduled_at: datetime) -> None:
    if as_utc(scheduled_at) <= utcnow():
        raise BadRequestError("Scheduled time must be in the future")


def _order(params: ListParams):
    return order_clause(
        LiveSession, params, allowed=SORTABLE_FIELDS,
        default_field="scheduled_at", default_order=SortOrder.ASC,
    )


def _upcoming_clause():
    return and_(
        LiveSession.is_active.is_(True),
        or_(
            and_(
                LiveSession.status == LiveSessionStatus.SCHEDULED,
                LiveSession.scheduled_at > utcnow(),
            ),
            LiveSession.status == LiveSessionStatus.LIVE,
        ),
    )


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


async def create_session(
    db: AsyncSession, host: CurrentUser, body: CreateLiveSessionRequest,
) -> LiveSession:
    _ensure_future(body.scheduled_at)
    session = LiveSession(
        **body.model_dump(exclude={"slug"}),
        slug=await resolve_slug(db, LiveSession, title=body.title, explicit=body.slug),
        status=LiveSessionStatus.SCHEDULED,
        host_id=host.id,
        host_name=host.full_name,
    )
    db.add(session)
    await flush_guarding_slug(db, session)
    logger.info("Live session %s scheduled for %s", session.id, session.scheduled_at)
    return session


async def list_sessions(
    db: AsyncSession, params: ListParams, filters: LiveSessionFilters,
) -> tuple[list[LiveSession], PageMeta]:
    stmt = apply_filters(
        select(LiveSession),
        LiveSession.status == filters.status if filters.status else None,
        LiveSession.category == filters.category if filters.category else None,
        LiveSession.topic == filters.topic if filters.topic else None,
        LiveSession.is_active == filters.is_active if filters.is_active is not None else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(db, stmt, params, order_by=_order(params))


async def list_upcoming_sessions(
    db: AsyncSession, params: ListParams, filters: LiveSessionFilters,
) -> tuple[list[LiveSession], PageMeta]:
    """Active sessions that are live now or scheduled in the future."""
    stmt = apply_filters(
        select(LiveSession),
        _upcoming_clause(),
        LiveSession.category == filters.category if filters.category else None,
        LiveSession.topic == filters.topic if filters.topic else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(db, stmt, params, order_by=_order(params))


async def search_sessions(db: AsyncSession, term: str) -> list[LiveSession]:
    result = await db.execute(
        select(LiveSession)
        .where(_upcoming_clause(), search_clause(SEARCH_COLUMNS, term))
        .order_by(LiveSession.scheduled_at.asc(), LiveSession.id.asc())
        .limit(SEARCH_RESULT_CAP)
    )
    return list(result.scalars().all())


async def _get(db: AsyncSession, session_id: uuid.UUID) -> LiveSession:
    session = await db.get(LiveSession, session_id)
    if session is None:
        raise NotFoundError(RESOURCE)
    return session


async def _view(
    db: AsyncSession, session: LiveSession | None, viewer: CurrentUser | None,
) -> LiveSession:
    is_public = session is not None and session.is_active
    ensure_visible(session, viewer, is_public=is_public, resource=RESOURCE)
    if is_public:
        await publishing.record_view(db, session)
    return session


async def get_session(
    db: AsyncSession, session_id: uuid.UUID, viewer: CurrentUser | None,
) -> LiveSession:
    return await _view(db, await db.get(LiveSession, session_id), viewer)


async def get_session_by_slug(
    db: AsyncSession, slug: str, viewer: CurrentUser | None,
) -> LiveSession:
    result = await db.execute(select(LiveSession).where(LiveSession.slug == slug))
    return await _view(db, result.scalar_one_or_none(), viewer)


async def update_session(
    db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser, fields: dict,
) -> LiveSession:
    session = await _get(db, session_id)
    ensure_can_modify(session, actor, resource=RESOURCE)
    fields = publishing.without_nulls(fields, REQUIRED_FIELDS)
    if "scheduled_at" in fields:
        fields["scheduled_at"] = to_utc(
            fields["scheduled_at"], fields.get("timezone", session.timezone),
        )
        _ensure_future(fields["scheduled_at"])
    await publishing.reslug_on_update(db, session, fields)
    publishing.apply_fields(session, fields)
    await flush_guarding_slug(db, session)
    return session


async def delete_session(db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser) -> None:
    session = await _get(db, session_id)
    ensure_can_modify(session, actor, resource=RESOURCE)
    await db.delete(session)
    await db.flush()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


async def _transition(
    db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser, action: SessionAction,
) -> LiveSession:
    session = await _get(db, session_id)
    ensure_can_modify(session, actor, resource=RESOURCE)
    previous = session.status
    session.status = LIVE_SESSION_LIFECYCLE.next_state(previous, action, resource=RESOURCE)
    if action == SessionAction.START:
        session.started_at = utcnow()
    elif action == SessionAction.END:
        session.ended_at = utcnow()
    elif action == SessionAction.CANCEL and previous == LiveSessionStatus.LIVE:
        session.ended_at = utcnow()
    logger.info("Live session %s: %s -> %s", session_id, previous.value, session.status.value)
    return session


async def _save(db: AsyncSession, session: LiveSession) -> LiveSession:
    await db.flush()
    await db.refresh(session)
    return session


async def start_session(db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser) -> LiveSession:
    return await _save(db, await _transition(db, session_id, actor, SessionAction.START))


async def end_session(db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser) -> LiveSession:
    return await _save(db, await _transition(db, session_id, actor, SessionAction.END))


async def cancel_session(db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser) -> LiveSession:
    return await _save(db, await _transition(db, session_id, actor, SessionAction.CANCEL))


async def postpone_session(db: AsyncSession, session_id: uuid.UUID, actor: CurrentUser) -> LiveSession:
    return await _save(db, await _transition(db, session_id, actor, SessionAction.POSTPONE))


async def reschedule_session(
    db: AsyncSession,
    session_id: uuid.UUID,
    actor: CurrentUser,
    scheduled_at: datetime,
    timezone: str | None = None,
) -> LiveSession:
    session = await _get(db, session_id)
    ensure_can_modify(session, actor, resource=RESOURCE)
    session.status = LIVE_SESSION_LIFECYCLE.next_state(
        session.status, SessionAction.RESCHEDULE, resource=RESOURCE,
    )
    new_time = to_utc(scheduled_at, timezone or session.timezone)
    _ensure_future(new_time)
    session.scheduled_at = new_time
    if timezone:
        session.timezone = timezone
    return await _save(db, session)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


async def session_statistics(db: AsyncSession) -> LiveSessionStatistics:
    rows = await db.execute(
        select(LiveSession.status, func.count()).group_by(LiveSession.status)
    )
    counts = {status: 0 for status in LiveSessionStatus}
    counts.update({status: count for status, count in rows.all()})
    views, registrations = (
        await db.execute(
            select(
                func.coalesce(func.sum(LiveSession.view_count), 0),
                func.coalesce(func.sum(LiveSession.registration_count), 0),
            )
        )
    ).one()
    return LiveSessionStatistics(
        total=sum(counts.values()),
        scheduled=counts[LiveSessionStatus.SCHEDULED],
        live=counts[LiveSessionStatus.LIVE],
        completed=counts[LiveSessionStatus.COMPLETED],
        cancelled=counts[LiveSessionStatus.CANCELLED],
        postponed=counts[LiveSessionStatus.POSTPONED],
        total_views=views,
        total_registrations=registrations,
    )
