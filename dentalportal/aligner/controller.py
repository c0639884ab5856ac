"""Aligner controller."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.aligner import service
from dentalportal.aligner.schemas import (
    AlignerCaseResponse,
    AlignerCaseStatistics,
    AlignerProcessRequest,
    AlignerProcessResponse,
    CreateAlignerCaseRequest,
    UpdateAlignerCaseRequest,
)
from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.pagination import ListParams
from dentalportal.schemas import parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

_RESOURCE = "Aligner case"


def _one(message: str, case) -> ApiResponse[AlignerCaseResponse]:
    return ApiResponse(message=message, data=AlignerCaseResponse.model_validate(case))


async def create_case(db: AsyncSession, body: CreateAlignerCaseRequest) -> ApiResponse[AlignerCaseResponse]:
    try:
        case = await service.create_case(db, body)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Aligner case created successfully", case)


async def list_cases(
    db: AsyncSession, params: ListParams, user_id: uuid.UUID | None,
) -> PaginatedResponse[AlignerCaseResponse]:
    cases, meta = await service.list_cases(db, params, user_id)
    return PaginatedResponse(
        message="Aligner cases retrieved successfully",
        data=[AlignerCaseResponse.model_validate(c) for c in cases],
        pagination=meta,
    )


async def get_case(db: AsyncSession, case_id: str) -> ApiResponse[AlignerCaseResponse]:
    try:
        case = await service.get_case(db, parse_uuid(case_id, _RESOURCE))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Aligner case retrieved successfully", case)


async def get_own_case(
    db: AsyncSession, case_id: str, viewer: CurrentUser,
) -> ApiResponse[AlignerCaseResponse]:
    try:
        case = await service.get_own_case(db, parse_uuid(case_id, _RESOURCE), viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Aligner case retrieved successfully", case)


async def update_case(
    db: AsyncSession, case_id: str, body: UpdateAlignerCaseRequest,
) -> ApiResponse[AlignerCaseResponse]:
    try:
        case = await service.update_case(
            db, parse_uuid(case_id, _RESOURCE), body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Aligner case updated successfully", case)


async def delete_case(db: AsyncSession, case_id: str) -> ApiResponse[None]:
    try:
        await service.delete_case(db, parse_uuid(case_id, _RESOURCE))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Aligner case deleted successfully")


async def statistics(db: AsyncSession) -> ApiResponse[AlignerCaseStatistics]:
    return ApiResponse(
        message="Aligner case statistics retrieved successfully",
        data=await service.case_statistics(db),
    )


async def get_process(db: AsyncSession) -> ApiResponse[AlignerProcessResponse]:
    process = await service.get_process(db)
    if process is None:
        return ApiResponse(message="No aligner process video has been set")
    return ApiResponse(
        message="Aligner process retrieved successfully",
        data=AlignerProcessResponse.model_validate(process),
    )


async def upsert_process(
    db: AsyncSession, body: AlignerProcessRequest,
) -> ApiResponse[AlignerProcessResponse]:
    process = await service.upsert_process(db, body.video_url)
    return ApiResponse(
        message="Aligner process updated successfully",
        data=AlignerProcessResponse.model_validate(process),
    )
