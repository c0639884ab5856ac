"""Map user router.

The directory itself is public (visible entries only); curating it is an
admin task. Static paths are declared before ``/{map_user_id}``.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.database import get_db
from dentalportal.dependencies import get_geocoder, require_admin
from dentalportal.integrations.geocoding import Geocoder
from dentalportal.map_users import controller
from dentalportal.map_users.schemas import (
    CreateMapUserRequest,
    MapUserResponse,
    MapUserStatistics,
    UpdateMapUserRequest,
)
from dentalportal.pagination import ListParams, list_params
from dentalportal.schemas import ToggleVisibilityRequest
from shared.models.pagination import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/map-users", tags=["map-users"])


@router.post(
    "",
    response_model=ApiResponse[MapUserResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Add a practice to the directory",
    description="The location is geocoded; a location that cannot be resolved is rejected.",
)
async def create_map_user(
    body: CreateMapUserRequest,
    db: AsyncSession = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
) -> ApiResponse[MapUserResponse]:
    return await controller.create_map_user(db, body, geocoder)


@router.get(
    "",
    response_model=ApiResponse[list[MapUserResponse]],
    summary="List practices shown on the map",
)
async def list_visible(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[MapUserResponse]]:
    return await controller.list_visible(db)


@router.get(
    "/admin",
    response_model=PaginatedResponse[MapUserResponse],
    dependencies=[Depends(require_admin)],
    summary="List all directory entries",
)
async def list_map_users(
    params: ListParams = Depends(list_params),
    show_on_map: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[MapUserResponse]:
    return await controller.list_map_users(db, params, show_on_map)


@router.get(
    "/statistics",
    response_model=ApiResponse[MapUserStatistics],
    dependencies=[Depends(require_admin)],
    summary="Directory statistics",
)
async def map_user_statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[MapUserStatistics]:
    return await controller.map_user_statistics(db)


@router.get(
    "/admin/{map_user_id}",
    response_model=ApiResponse[MapUserResponse],
    dependencies=[Depends(require_admin)],
    summary="Get any directory entry",
)
async def get_map_user_admin(
    map_user_id: str, db: AsyncSession = Depends(get_db),
) -> ApiResponse[MapUserResponse]:
    return await controller.get_map_user(db, map_user_id)


@router.get(
    "/{map_user_id}",
    response_model=ApiResponse[MapUserResponse],
    summary="Get a practice shown on the map",
)
async def get_map_user(
    map_user_id: str, db: AsyncSession = Depends(get_db),
) -> ApiResponse[MapUserResponse]:
    return await controller.get_map_user(db, map_user_id, visible_only=True)


@router.put(
    "/{map_user_id}",
    response_model=ApiResponse[MapUserResponse],
    dependencies=[Depends(require_admin)],
    summary="Update a directory entry",
)
async def update_map_user(
    map_user_id: str,
    body: UpdateMapUserRequest,
    db: AsyncSession = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
) -> ApiResponse[MapUserResponse]:
    return await controller.update_map_user(db, map_user_id, body, geocoder)


@router.patch(
    "/{map_user_id}/toggle-visibility",
    response_model=ApiResponse[MapUserResponse],
    dependencies=[Depends(require_admin)],
    summary="Show or hide a directory entry",
    description="With a body the flag is set explicitly; without one it is flipped.",
)
async def toggle_visibility(
    map_user_id: str,
    body: ToggleVisibilityRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[MapUserResponse]:
    return await controller.toggle_visibility(db, map_user_id, body.show_on_map if body else None)


@router.delete(
    "/{map_user_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
    summary="Remove a directory entry",
)
async def delete_map_user(map_user_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[None]:
    return await controller.delete_map_user(db, map_user_id)
