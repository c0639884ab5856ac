"""Case study controller."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.case_studies import service
from dentalportal.case_studies.schemas import (
    CaseStudyRequest,
    CaseStudyResponse,
    UpdateCaseStudyRequest,
)
from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.models.enums import Gender
from dentalportal.pagination import ListParams
from dentalportal.schemas import parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse


async def create_case_study(db: AsyncSession, body: CaseStudyRequest) -> ApiResponse[CaseStudyResponse]:
    case_study = await service.create_case_study(db, body)
    return ApiResponse(
        message="Case study created successfully",
        data=CaseStudyResponse.model_validate(case_study),
    )


async def list_case_studies(
    db: AsyncSession, params: ListParams, gender: Gender | None,
) -> PaginatedResponse[CaseStudyResponse]:
    items, meta = await service.list_case_studies(db, params, gender)
    return PaginatedResponse(
        message="Case studies retrieved successfully",
        data=[CaseStudyResponse.model_validate(c) for c in items],
        pagination=meta,
    )


async def get_case_study(db: AsyncSession, case_study_id: str) -> ApiResponse[CaseStudyResponse]:
    try:
        case_study = await service.get_case_study(db, parse_uuid(case_study_id, "Case study"))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Case study retrieved successfully",
        data=CaseStudyResponse.model_validate(case_study),
    )


async def update_case_study(
    db: AsyncSession, case_study_id: str, body: UpdateCaseStudyRequest,
) -> ApiResponse[CaseStudyResponse]:
    try:
        case_study = await service.update_case_study(
            db, parse_uuid(case_study_id, "Case study"), body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Case study updated successfully",
        data=CaseStudyResponse.model_validate(case_study),
    )


async def delete_case_study(db: AsyncSession, case_study_id: str) -> ApiResponse[None]:
    try:
        await service.delete_case_study(db, parse_uuid(case_study_id, "Case study"))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Case study deleted successfully")
