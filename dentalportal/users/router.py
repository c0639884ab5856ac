"""Users router: admin account management and the public practitioner map."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, get_geocoder, require_admin
from dentalportal.integrations.geocoding import Geocoder
from dentalportal.models.enums import UserRole
from dentalportal.pagination import ListParams, list_params
from dentalportal.schemas import ToggleVisibilityRequest
from dentalportal.users import controller
from dentalportal.users.schemas import (
    AdminUserResponse,
    UpdateLocationRequest,
    UpdateVerificationRequest,
    UserCoordinates,
    UserFilters,
    UserStatistics,
)
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/coordinates",
    response_model=ApiResponse[list[UserCoordinates]],
    summary="Practitioners shown on the public map",
)
async def coordinates(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[UserCoordinates]]:
    return await controller.coordinates(db)


@router.put(
    "/me/location",
    response_model=ApiResponse[AdminUserResponse],
    summary="Geocode and store my practice location",
)
async def update_my_location(
    body: UpdateLocationRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    geocoder: Geocoder = Depends(get_geocoder),
) -> ApiResponse[AdminUserResponse]:
    return await controller.update_my_location(db, current_user.id, body, geocoder)


@router.get(
    "/statistics",
    response_model=ApiResponse[UserStatistics],
    dependencies=[Depends(require_admin)],
    summary="User totals by verification and profession",
)
async def statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[UserStatistics]:
    return await controller.statistics(db)


@router.get(
    "",
    response_model=PaginatedResponse[AdminUserResponse],
    dependencies=[Depends(require_admin)],
    summary="List and search users",
    description="Searches first name, last name, email and phone. "
    "Lists practitioner accounts unless `role` is given.",
)
async def list_users(
    params: ListParams = Depends(list_params),
    role: UserRole | None = Query(None),
    is_email_verified: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[AdminUserResponse]:
    filters = UserFilters(role=role, is_email_verified=is_email_verified)
    return await controller.list_users(db, params, filters)


@router.get(
    "/{user_id}",
    response_model=ApiResponse[AdminUserResponse],
    dependencies=[Depends(require_admin)],
    summary="Get a user",
)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[AdminUserResponse]:
    return await controller.get_user(db, user_id)


@router.patch(
    "/{user_id}/verification",
    response_model=ApiResponse[AdminUserResponse],
    dependencies=[Depends(require_admin)],
    summary="Mark a user's email as verified or unverified",
)
async def update_verification(
    user_id: str,
    body: UpdateVerificationRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AdminUserResponse]:
    return await controller.update_verification(db, user_id, body)


@router.patch(
    "/{user_id}/map-visibility",
    response_model=ApiResponse[AdminUserResponse],
    dependencies=[Depends(require_admin)],
    summary="Show or hide a user on the map",
)
async def update_map_visibility(
    user_id: str,
    body: ToggleVisibilityRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AdminUserResponse]:
    return await controller.update_map_visibility(db, user_id, body.show_on_map)


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
    summary="Delete a user",
)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[None]:
    return await controller.delete_user(db, user_id)
