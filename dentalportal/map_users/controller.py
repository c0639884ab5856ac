"""Map user controller."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.integrations.geocoding import Geocoder
from dentalportal.map_users import service
from dentalportal.map_users.schemas import (
    CreateMapUserRequest,
    MapUserResponse,
    MapUserStatistics,
    UpdateMapUserRequest,
)
from dentalportal.pagination import ListParams
from dentalportal.schemas import parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse

_RESOURCE = "Map user"


async def create_map_user(
    db: AsyncSession, body: CreateMapUserRequest, geocoder: Geocoder,
) -> ApiResponse[MapUserResponse]:
    try:
        map_user = await service.create_map_user(db, body, geocoder)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Map user created successfully",
        data=MapUserResponse.model_validate(map_user),
    )


async def list_map_users(
    db: AsyncSession, params: ListParams, show_on_map: bool | None,
) -> PaginatedResponse[MapUserResponse]:
    items, meta = await service.list_map_users(db, params, show_on_map)
    return PaginatedResponse(
        message="Map users retrieved successfully",
        data=[MapUserResponse.model_validate(m) for m in items],
        pagination=meta,
    )


async def list_visible(db: AsyncSession) -> ApiResponse[list[MapUserResponse]]:
    items = await service.list_visible(db)
    return ApiResponse(
        message="Map users retrieved successfully",
        data=[MapUserResponse.model_validate(m) for m in items],
    )


async def get_map_user(
    db: AsyncSession, map_user_id: str, *, visible_only: bool = False,
) -> ApiResponse[MapUserResponse]:
    try:
        parsed = parse_uuid(map_user_id, _RESOURCE)
        if visible_only:
            map_user = await service.get_visible(db, parsed)
        else:
            map_user = await service.get_map_user(db, parsed)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Map user retrieved successfully",
        data=MapUserResponse.model_validate(map_user),
    )


async def update_map_user(
    db: AsyncSession, map_user_id: str, body: UpdateMapUserRequest, geocoder: Geocoder,
) -> ApiResponse[MapUserResponse]:
    try:
        map_user = await service.update_map_user(
            db, parse_uuid(map_user_id, _RESOURCE), body.model_dump(exclude_unset=True), geocoder,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Map user updated successfully",
        data=MapUserResponse.model_validate(map_user),
    )


async def toggle_visibility(
    db: AsyncSession, map_user_id: str, show_on_map: bool | None,
) -> ApiResponse[MapUserResponse]:
    try:
        map_user = await service.set_visibility(db, parse_uuid(map_user_id, _RESOURCE), show_on_map)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    state = "visible on" if map_user.show_on_map else "hidden from"
    return ApiResponse(
        message=f"Map user is now {state} the map",
        data=MapUserResponse.model_validate(map_user),
    )


async def delete_map_user(db: AsyncSession, map_user_id: str) -> ApiResponse[None]:
    try:
        await service.delete_map_user(db, parse_uuid(map_user_id, _RESOURCE))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Map user deleted successfully")


async def map_user_statistics(db: AsyncSession) -> ApiResponse[MapUserStatistics]:
    return ApiResponse(
        message="Map user statistics retrieved successfully",
        data=await service.map_user_statistics(db),
    )
