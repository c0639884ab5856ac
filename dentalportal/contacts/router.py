"""Contact router."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.contacts import controller
from dentalportal.contacts.schemas import ContactRequest, ContactResponse
from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, require_admin
from dentalportal.pagination import ListParams, list_params
from dentalportal.rate_limit import limiter
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post(
    "",
    response_model=ApiResponse[ContactResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Send a message to the team",
    description="Messages are limited to 500 characters.",
)
@limiter.limit("10/hour")
async def submit_query(
    request: Request,
    body: ContactRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[ContactResponse]:
    return await controller.submit_query(db, current_user.id, body)


@router.get(
    "",
    response_model=PaginatedResponse[ContactResponse],
    dependencies=[Depends(require_admin)],
    summary="List contact queries",
)
async def list_queries(
    params: ListParams = Depends(list_params),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ContactResponse]:
    return await controller.list_queries(db, params)
