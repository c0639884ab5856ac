"""Case study router. Reads are public; writes are admin only."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.case_studies import controller
from dentalportal.case_studies.schemas import (
    CaseStudyRequest,
    CaseStudyResponse,
    UpdateCaseStudyRequest,
)
from dentalportal.database import get_db
from dentalportal.dependencies import require_admin
from dentalportal.models.enums import Gender
from dentalportal.pagination import ListParams, list_params
from shared.models.pagination import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/case-studies", tags=["case-studies"])


@router.post(
    "",
    response_model=ApiResponse[CaseStudyResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Add a case study",
)
async def create_case_study(
    body: CaseStudyRequest, db: AsyncSession = Depends(get_db),
) -> ApiResponse[CaseStudyResponse]:
    return await controller.create_case_study(db, body)


@router.get("", response_model=PaginatedResponse[CaseStudyResponse], summary="List case studies")
async def list_case_studies(
    params: ListParams = Depends(list_params),
    gender: Gender | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[CaseStudyResponse]:
    return await controller.list_case_studies(db, params, gender)


@router.get(
    "/admin",
    response_model=PaginatedResponse[CaseStudyResponse],
    dependencies=[Depends(require_admin)],
    summary="List case studies (admin)",
)
async def list_case_studies_admin(
    params: ListParams = Depends(list_params),
    gender: Gender | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[CaseStudyResponse]:
    return await controller.list_case_studies(db, params, gender)


@router.get("/{case_study_id}", response_model=ApiResponse[CaseStudyResponse], summary="Get a case study")
async def get_case_study(
    case_study_id: str, db: AsyncSession = Depends(get_db),
) -> ApiResponse[CaseStudyResponse]:
    return await controller.get_case_study(db, case_study_id)


@router.put(
    "/{case_study_id}",
    response_model=ApiResponse[CaseStudyResponse],
    dependencies=[Depends(require_admin)],
    summary="Update a case study",
)
async def update_case_study(
    case_study_id: str,
    body: UpdateCaseStudyRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CaseStudyResponse]:
    return await controller.update_case_study(db, case_study_id, body)


@router.delete(
    "/{case_study_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
    summary="Delete a case study",
)
async def delete_case_study(case_study_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[None]:
    return await controller.delete_case_study(db, case_study_id)
