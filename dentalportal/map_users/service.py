"""Map user service: the curated "find a dentist" directory.

Every record carries coordinates: creating a record, or changing its
location, geocodes the address and fails when no coordinates come back.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.exceptions import ConflictError, GeocodingFailedError, NotFoundError
from dentalportal.integrations.geocoding import Coordinates, Geocoder
from dentalportal.map_users.schemas import CreateMapUserRequest, LocationCount, MapUserStatistics
from dentalportal.models.map_user import MapUser
from dentalportal.pagination import ListParams, apply_filters, order_clause, paginate, search_clause
from shared.models.pagination import PageMeta

logger = logging.getLogger(__name__)

RESOURCE = "Map user"
PHONE_TAKEN = "A user with this phone number already exists"
POPULAR_LOCATIONS_LIMIT = 10
SORTABLE_FIELDS = ("created_at", "updated_at", "first_name", "last_name", "location", "clinic_name")
SEARCH_COLUMNS = (
    MapUser.first_name, MapUser.last_name, MapUser.phone,
    MapUser.location, MapUser.clinic_name, MapUser.zip_code,
)
REQUIRED_FIELDS = (
    "first_name", "last_name", "phone", "location", "clinic_name", "zip_code", "show_on_map",
)


async def _phone_taken(db: AsyncSession, phone: str, exclude_id: uuid.UUID | None = None) -> bool:
    stmt = select(func.count()).select_from(MapUser).where(MapUser.phone == phone)
    if exclude_id is not None:
        stmt = stmt.where(MapUser.id != exclude_id)
    return bool(await db.scalar(stmt))


async def _geocode(geocoder: Geocoder, location: str) -> Coordinates:
    coordinates = await geocoder.geocode(location)
    if coordinates is None:
        raise GeocodingFailedError()
    return coordinates


async def _save(db: AsyncSession, map_user: MapUser) -> MapUser:
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(PHONE_TAKEN) from exc
    await db.refresh(map_user)
    return map_user


async def _get(db: AsyncSession, map_user_id: uuid.UUID) -> MapUser:
    map_user = await db.get(MapUser, map_user_id)
    if map_user is None:
        raise NotFoundError(RESOURCE)
    return map_user


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


async def create_map_user(
    db: AsyncSession, body: CreateMapUserRequest, geocoder: Geocoder,
) -> MapUser:
    if await _phone_taken(db, body.phone):
        raise ConflictError(PHONE_TAKEN)
    coordinates = await _geocode(geocoder, body.location)
    map_user = MapUser(
        **body.model_dump(),
        latitude=coordinates.latitude,
        longitude=coordinates.longitude,
    )
    db.add(map_user)
    map_user = await _save(db, map_user)
    logger.info("Map user %s created at %s", map_user.id, body.location)
    return map_user


async def list_map_users(
    db: AsyncSession, params: ListParams, show_on_map: bool | None = None,
) -> tuple[list[MapUser], PageMeta]:
    stmt = apply_filters(
        select(MapUser),
        MapUser.show_on_map == show_on_map if show_on_map is not None else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(MapUser, params, allowed=SORTABLE_FIELDS),
    )


async def get_map_user(db: AsyncSession, map_user_id: uuid.UUID) -> MapUser:
    return await _get(db, map_user_id)


async def update_map_user(
    db: AsyncSession, map_user_id: uuid.UUID, fields: dict, geocoder: Geocoder,
) -> MapUser:
    map_user = await _get(db, map_user_id)
    fields = publishing.without_nulls(fields, REQUIRED_FIELDS)
    phone = fields.get("phone")
    if phone and phone != map_user.phone and await _phone_taken(db, phone, exclude_id=map_user.id):
        raise ConflictError(PHONE_TAKEN)
    location = fields.get("location")
    if location and location != map_user.location:
        coordinates = await _geocode(geocoder, location)
        fields["latitude"] = coordinates.latitude
        fields["longitude"] = coordinates.longitude
    publishing.apply_fields(map_user, fields)
    return await _save(db, map_user)


async def set_visibility(db: AsyncSession, map_user_id: uuid.UUID, show_on_map: bool | None) -> MapUser:
    """Set visibility, or flip it when ``show_on_map`` is None."""
    map_user = await _get(db, map_user_id)
    map_user.show_on_map = (not map_user.show_on_map) if show_on_map is None else show_on_map
    await db.flush()
    await db.refresh(map_user)
    return map_user


async def delete_map_user(db: AsyncSession, map_user_id: uuid.UUID) -> None:
    await db.delete(await _get(db, map_user_id))
    await db.flush()


async def map_user_statistics(db: AsyncSession) -> MapUserStatistics:
    total, visible = (
        await db.execute(
            select(
                func.count(MapUser.id),
                func.count(MapUser.id).filter(MapUser.show_on_map.is_(True)),
            )
        )
    ).one()
    location_count = func.count(MapUser.id).label("count")
    popular = await db.execute(
        select(MapUser.location, location_count)
        .group_by(MapUser.location)
        .order_by(location_count.desc(), MapUser.location.asc())
        .limit(POPULAR_LOCATIONS_LIMIT)
    )
    return MapUserStatistics(
        total=total,
        visible=visible,
        hidden=total - visible,
        popular_locations=[LocationCount(location=loc, count=n) for loc, n in popular.all()],
    )


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


async def list_visible(db: AsyncSession) -> list[MapUser]:
    result = await db.execute(
        select(MapUser).where(MapUser.show_on_map.is_(True)).order_by(MapUser.created_at.desc())
    )
    return list(result.scalars().all())


async def get_visible(db: AsyncSession, map_user_id: uuid.UUID) -> MapUser:
    map_user = await db.get(MapUser, map_user_id)
    if map_user is None or not map_user.show_on_map:
        raise NotFoundError(RESOURCE)
    return map_user
