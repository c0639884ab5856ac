"""Live session controller."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.live_sessions import service
from dentalportal.live_sessions.schemas import (
    CreateLiveSessionRequest,
    LiveSessionFilters,
    LiveSessionResponse,
    LiveSessionStatistics,
    RescheduleRequest,
    UpdateLiveSessionRequest,
)
from dentalportal.models.live_session import LiveSession
from dentalportal.pagination import ListParams
from dentalportal.schemas import parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

_RESOURCE = "Live session"


def _one(message: str, session: LiveSession) -> ApiResponse[LiveSessionResponse]:
    return ApiResponse(message=message, data=LiveSessionResponse.model_validate(session))


def _page(sessions, meta) -> PaginatedResponse[LiveSessionResponse]:
    return PaginatedResponse(
        message="Live sessions retrieved successfully",
        data=[LiveSessionResponse.model_validate(s) for s in sessions],
        pagination=meta,
    )


async def create_session(
    db: AsyncSession, host: CurrentUser, body: CreateLiveSessionRequest,
) -> ApiResponse[LiveSessionResponse]:
    try:
        session = await service.create_session(db, host, body)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Live session created successfully", session)


async def list_sessions(
    db: AsyncSession, params: ListParams, filters: LiveSessionFilters,
) -> PaginatedResponse[LiveSessionResponse]:
    return _page(*await service.list_sessions(db, params, filters))


async def list_upcoming_sessions(
    db: AsyncSession, params: ListParams, filters: LiveSessionFilters,
) -> PaginatedResponse[LiveSessionResponse]:
    return _page(*await service.list_upcoming_sessions(db, params, filters))


async def search_sessions(db: AsyncSession, term: str) -> ApiResponse[list[LiveSessionResponse]]:
    sessions = await service.search_sessions(db, term)
    return ApiResponse(
        message="Live sessions retrieved successfully",
        data=[LiveSessionResponse.model_validate(s) for s in sessions],
    )


async def get_session(
    db: AsyncSession, session_id: str, viewer: CurrentUser | None,
) -> ApiResponse[LiveSessionResponse]:
    try:
        session = await service.get_session(db, parse_uuid(session_id, _RESOURCE), viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Live session retrieved successfully", session)


async def get_session_by_slug(
    db: AsyncSession, slug: str, viewer: CurrentUser | None,
) -> ApiResponse[LiveSessionResponse]:
    try:
        session = await service.get_session_by_slug(db, slug, viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Live session retrieved successfully", session)


async def update_session(
    db: AsyncSession, session_id: str, actor: CurrentUser, body: UpdateLiveSessionRequest,
) -> ApiResponse[LiveSessionResponse]:
    try:
        session = await service.update_session(
            db, parse_uuid(session_id, _RESOURCE), actor, body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Live session updated successfully", session)


async def delete_session(db: AsyncSession, session_id: str, actor: CurrentUser) -> ApiResponse[None]:
    try:
        await service.delete_session(db, parse_uuid(session_id, _RESOURCE), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Live session deleted successfully")


async def _lifecycle(
    action: Callable[..., Awaitable[LiveSession]],
    message: str,
    db: AsyncSession,
    session_id: str,
    actor: CurrentUser,
) -> ApiResponse[LiveSessionResponse]:
    try:
        session = await action(db, parse_uuid(session_id, _RESOURCE), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one(message, session)


async def start_session(db: AsyncSession, session_id: str, actor: CurrentUser) -> ApiResponse[LiveSessionResponse]:
    return await _lifecycle(service.start_session, "Live session started", db, session_id, actor)


async def end_session(db: AsyncSession, session_id: str, actor: CurrentUser) -> ApiResponse[LiveSessionResponse]:
    return await _lifecycle(service.end_session, "Live session ended", db, session_id, actor)


async def cancel_session(db: AsyncSession, session_id: str, actor: CurrentUser) -> ApiResponse[LiveSessionResponse]:
    return await _lifecycle(service.cancel_session, "Live session cancelled", db, session_id, actor)


async def postpone_session(db: AsyncSession, session_id: str, actor: CurrentUser) -> ApiResponse[LiveSessionResponse]:
    return await _lifecycle(service.postpone_session, "Live session postponed", db, session_id, actor)


async def reschedule_session(
    db: AsyncSession, session_id: str, actor: CurrentUser, body: RescheduleRequest,
) -> ApiResponse[LiveSessionResponse]:
    try:
        session = await service.reschedule_session(
            db, parse_uuid(session_id, _RESOURCE), actor, body.scheduled_at, body.timezone,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Live session rescheduled", session)


async def statistics(db: AsyncSession) -> ApiResponse[LiveSessionStatistics]:
    return ApiResponse(
        message="Live session statistics retrieved successfully",
        data=await service.session_statistics(db),
    )
