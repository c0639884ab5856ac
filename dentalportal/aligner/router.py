"""Aligner routers: cases (``/aligner-cases``) and the process video (``/aligner-process``)."""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.aligner import controller
from dentalportal.aligner.schemas import (
    AlignerCaseResponse,
    AlignerCaseStatistics,
    AlignerProcessRequest,
    AlignerProcessResponse,
    CreateAlignerCaseRequest,
    UpdateAlignerCaseRequest,
)
from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, require_admin
from dentalportal.pagination import ListParams, list_params
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

cases_router = APIRouter(prefix="/aligner-cases", tags=["aligner-cases"])
process_router = APIRouter(prefix="/aligner-process", tags=["aligner-process"])

Case = ApiResponse[AlignerCaseResponse]


# ======================================================================
# Cases
# ======================================================================


@cases_router.post(
    "",
    response_model=Case,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create an aligner case for a practitioner",
)
async def create_case(body: CreateAlignerCaseRequest, db: AsyncSession = Depends(get_db)) -> Case:
    return await controller.create_case(db, body)


@cases_router.get(
    "/admin",
    response_model=PaginatedResponse[AlignerCaseResponse],
    dependencies=[Depends(require_admin)],
    summary="List all aligner cases",
)
async def list_cases(
    params: ListParams = Depends(list_params),
    user_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[AlignerCaseResponse]:
    return await controller.list_cases(db, params, user_id)


@cases_router.get(
    "/statistics",
    response_model=ApiResponse[AlignerCaseStatistics],
    dependencies=[Depends(require_admin)],
    summary="Aligner case totals",
)
async def statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[AlignerCaseStatistics]:
    return await controller.statistics(db)


@cases_router.get(
    "/my-cases",
    response_model=PaginatedResponse[AlignerCaseResponse],
    summary="My aligner cases",
)
async def my_cases(
    params: ListParams = Depends(list_params),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> PaginatedResponse[AlignerCaseResponse]:
    return await controller.list_cases(db, params, current_user.id)


@cases_router.get(
    "/admin/{case_id}",
    response_model=Case,
    dependencies=[Depends(require_admin)],
    summary="Get any aligner case",
)
async def get_case_admin(case_id: str, db: AsyncSession = Depends(get_db)) -> Case:
    return await controller.get_case(db, case_id)


@cases_router.get("/{case_id}", response_model=Case, summary="Get one of my aligner cases")
async def get_own_case(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Case:
    return await controller.get_own_case(db, case_id, current_user)


@cases_router.put(
    "/{case_id}",
    response_model=Case,
    dependencies=[Depends(require_admin)],
    summary="Update an aligner case",
)
async def update_case(
    case_id: str, body: UpdateAlignerCaseRequest, db: AsyncSession = Depends(get_db),
) -> Case:
    return await controller.update_case(db, case_id, body)


@cases_router.delete(
    "/{case_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
    summary="Delete an aligner case",
)
async def delete_case(case_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[None]:
    return await controller.delete_case(db, case_id)


# ======================================================================
# Process video
# ======================================================================


@process_router.get("", response_model=ApiResponse[AlignerProcessResponse], summary="Aligner process video")
async def get_process(db: AsyncSession = Depends(get_db)) -> ApiResponse[AlignerProcessResponse]:
    return await controller.get_process(db)


@process_router.put(
    "",
    response_model=ApiResponse[AlignerProcessResponse],
    dependencies=[Depends(require_admin)],
    summary="Set the aligner process video",
)
async def upsert_process(
    body: AlignerProcessRequest, db: AsyncSession = Depends(get_db),
) -> ApiResponse[AlignerProcessResponse]:
    return await controller.upsert_process(db, body)
