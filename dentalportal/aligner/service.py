"""Aligner cases and the aligner process video.

Cases are entered by admins on behalf of a practitioner; practitioners can
read only their own.
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.aligner.schemas import AlignerCaseStatistics, CreateAlignerCaseRequest
from dentalportal.exceptions import ForbiddenError, NotFoundError
from dentalportal.models.aligner_case import AlignerCase
from dentalportal.models.base import utcnow
from dentalportal.models.showcase import AlignerProcess
from dentalportal.models.user import User
from dentalportal.pagination import ListParams, apply_filters, order_clause, paginate, search_clause
from shared.models.pagination import PageMeta
from shared.models.user import CurrentUser

SORTABLE_FIELDS = ("created_at", "updated_at", "patient_name", "quantity")


async def _ensure_user_exists(db: AsyncSession, user_id: uuid.UUID) -> None:
    if await db.get(User, user_id) is None:
        raise NotFoundError("User")


async def _get(db: AsyncSession, case_id: uuid.UUID) -> AlignerCase:
    case = await db.get(AlignerCase, case_id)
    if case is None:
        raise NotFoundError("Aligner case")
    return case


# ---------------------------------------------------------------------------
# Cases
# ---------------------------------------------------------------------------


async def create_case(db: AsyncSession, body: CreateAlignerCaseRequest) -> AlignerCase:
    await _ensure_user_exists(db, body.user_id)
    case = AlignerCase(**body.model_dump())
    db.add(case)
    await db.flush()
    await db.refresh(case)
    return case


async def list_cases(
    db: AsyncSession, params: ListParams, user_id: uuid.UUID | None = None,
) -> tuple[list[AlignerCase], PageMeta]:
    stmt = apply_filters(
        select(AlignerCase),
        AlignerCase.user_id == user_id if user_id else None,
        search_clause((AlignerCase.patient_name,), params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(AlignerCase, params, allowed=SORTABLE_FIELDS),
    )


async def get_case(db: AsyncSession, case_id: uuid.UUID) -> AlignerCase:
    return await _get(db, case_id)


async def get_own_case(db: AsyncSession, case_id: uuid.UUID, viewer: CurrentUser) -> AlignerCase:
    case = await _get(db, case_id)
    if not viewer.is_admin and case.user_id != viewer.id:
        raise ForbiddenError("You can only view your own aligner cases")
    return case


async def update_case(db: AsyncSession, case_id: uuid.UUID, fields: dict) -> AlignerCase:
    case = await _get(db, case_id)
    fields = publishing.without_nulls(fields, ("patient_name", "quantity", "user_id"))
    if "user_id" in fields:
        await _ensure_user_exists(db, fields["user_id"])
    publishing.apply_fields(case, fields)
    await db.flush()
    await db.refresh(case)
    return case


async def delete_case(db: AsyncSession, case_id: uuid.UUID) -> None:
    await db.delete(await _get(db, case_id))
    await db.flush()


async def case_statistics(db: AsyncSession) -> AlignerCaseStatistics:
    month_start = utcnow().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    total, quantity, practitioners, this_month = (
        await db.execute(
            select(
                func.count(AlignerCase.id),
                func.coalesce(func.sum(AlignerCase.quantity), 0),
                func.count(func.distinct(AlignerCase.user_id)),
                func.count(AlignerCase.id).filter(AlignerCase.created_at >= month_start),
            )
        )
    ).one()
    return AlignerCaseStatistics(
        total_cases=total,
        total_quantity=quantity,
        practitioners=practitioners,
        cases_this_month=this_month,
    )


# ---------------------------------------------------------------------------
# Process video (single row)
# ---------------------------------------------------------------------------


async def get_process(db: AsyncSession) -> AlignerProcess | None:
    result = await db.execute(select(AlignerProcess).order_by(AlignerProcess.created_at).limit(1))
    return result.scalar_one_or_none()


async def upsert_process(db: AsyncSession, video_url: str) -> AlignerProcess:
    process = await get_process(db)
    if process is None:
        process = AlignerProcess(video_url=video_url)
        db.add(process)
    else:
        process.video_url = video_url
    await db.flush()
    await db.refresh(process)
    return process
