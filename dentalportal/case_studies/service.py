"""Case study service."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.case_studies.schemas import CaseStudyRequest
from dentalportal.exceptions import NotFoundError
from dentalportal.models.enums import Gender
from dentalportal.models.showcase import CaseStudy
from dentalportal.pagination import ListParams, apply_filters, order_clause, paginate, search_clause
from shared.models.pagination import PageMeta

SORTABLE_FIELDS = ("created_at", "updated_at", "name", "age")
SEARCH_COLUMNS = (CaseStudy.name, CaseStudy.case_description)
REQUIRED_FIELDS = ("name", "age", "case_description", "gender", "upper", "lower")


async def create_case_study(db: AsyncSession, body: CaseStudyRequest) -> CaseStudy:
    case_study = CaseStudy(**body.model_dump())
    db.add(case_study)
    await db.flush()
    await db.refresh(case_study)
    return case_study


async def list_case_studies(
    db: AsyncSession, params: ListParams, gender: Gender | None = None,
) -> tuple[list[CaseStudy], PageMeta]:
    stmt = apply_filters(
        select(CaseStudy),
        CaseStudy.gender == gender if gender else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(CaseStudy, params, allowed=SORTABLE_FIELDS),
    )


async def get_case_study(db: AsyncSession, case_study_id: uuid.UUID) -> CaseStudy:
    case_study = await db.get(CaseStudy, case_study_id)
    if case_study is None:
        raise NotFoundError("Case study")
    return case_study


async def update_case_study(db: AsyncSession, case_study_id: uuid.UUID, fields: dict) -> CaseStudy:
    case_study = await get_case_study(db, case_study_id)
    publishing.apply_fields(case_study, publishing.without_nulls(fields, REQUIRED_FIELDS))
    await db.flush()
    await db.refresh(case_study)
    return case_study


async def delete_case_study(db: AsyncSession, case_study_id: uuid.UUID) -> None:
    case_study = await get_case_study(db, case_study_id)
    await db.delete(case_study)
    await db.flush()
