"""Users controller: wraps service results in the response envelope."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.integrations.geocoding import Geocoder
from dentalportal.pagination import ListParams
from dentalportal.schemas import parse_uuid
from dentalportal.users import service
from dentalportal.users.schemas import (
    AdminUserResponse,
    UpdateLocationRequest,
    UpdateVerificationRequest,
    UserCoordinates,
    UserFilters,
    UserStatistics,
)
from shared.models.pagination import ApiResponse, PaginatedResponse


async def list_users(
    db: AsyncSession, params: ListParams, filters: UserFilters,
) -> PaginatedResponse[AdminUserResponse]:
    users, meta = await service.list_users(db, params, filters)
    return PaginatedResponse(
        message="Users retrieved successfully",
        data=[AdminUserResponse.model_validate(u) for u in users],
        pagination=meta,
    )


async def get_user(db: AsyncSession, user_id: str) -> ApiResponse[AdminUserResponse]:
    try:
        user = await service.get_user(db, parse_uuid(user_id, "User"))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="User retrieved successfully", data=AdminUserResponse.model_validate(user))


async def update_verification(
    db: AsyncSession, user_id: str, body: UpdateVerificationRequest,
) -> ApiResponse[AdminUserResponse]:
    try:
        user = await service.set_verification(db, parse_uuid(user_id, "User"), body.is_email_verified)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="User verification status updated successfully",
        data=AdminUserResponse.model_validate(user),
    )


async def update_map_visibility(
    db: AsyncSession, user_id: str, show_on_map: bool,
) -> ApiResponse[AdminUserResponse]:
    try:
        user = await service.set_map_visibility(db, parse_uuid(user_id, "User"), show_on_map)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="User map visibility updated successfully",
        data=AdminUserResponse.model_validate(user),
    )


async def delete_user(db: AsyncSession, user_id: str) -> ApiResponse[None]:
    try:
        await service.delete_user(db, parse_uuid(user_id, "User"))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="User deleted successfully")


async def statistics(db: AsyncSession) -> ApiResponse[UserStatistics]:
    stats = await service.user_statistics(db)
    return ApiResponse(message="User statistics retrieved successfully", data=stats)


async def coordinates(db: AsyncSession) -> ApiResponse[list[UserCoordinates]]:
    users = await service.list_map_coordinates(db)
    return ApiResponse(
        message="User coordinates retrieved successfully",
        data=[UserCoordinates.model_validate(u) for u in users],
    )


async def update_my_location(
    db: AsyncSession, user_id: uuid.UUID, body: UpdateLocationRequest, geocoder: Geocoder,
) -> ApiResponse[AdminUserResponse]:
    try:
        user = await service.update_own_location(
            db, user_id, body.location, geocoder, show_on_map=body.show_on_map,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Location updated successfully", data=AdminUserResponse.model_validate(user))
