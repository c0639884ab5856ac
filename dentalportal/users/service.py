"""Users service: account administration and practitioner map data."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import ForbiddenError, GeocodingFailedError, NotFoundError
from dentalportal.integrations.geocoding import Geocoder
from dentalportal.models.enums import ProfessionalType, UserRole
from dentalportal.models.user import User
from dentalportal.pagination import ListParams, apply_filters, order_clause, paginate, search_clause
from dentalportal.users.schemas import UserFilters, UserStatistics
from shared.models.pagination import PageMeta

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("created_at", "first_name", "last_name", "email", "updated_at")
SEARCH_COLUMNS = (User.first_name, User.last_name, User.email, User.phone)


async def _get_managed_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    """Admins cannot inspect or change other administrators through this API."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    if user.is_admin:
        raise ForbiddenError("Administrator accounts cannot be managed here")
    return user


async def list_users(
    db: AsyncSession, params: ListParams, filters: UserFilters,
) -> tuple[list[User], PageMeta]:
    stmt = apply_filters(
        select(User),
        User.role == (filters.role or UserRole.USER),
        User.is_email_verified == filters.is_email_verified
        if filters.is_email_verified is not None else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(User, params, allowed=SORTABLE_FIELDS),
    )


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    return await _get_managed_user(db, user_id)


async def set_verification(db: AsyncSession, user_id: uuid.UUID, verified: bool) -> User:
    user = await _get_managed_user(db, user_id)
    user.is_email_verified = verified
    if verified:
        user.email_verification_token = None
        user.email_verification_expires_at = None
    await db.flush()
    await db.refresh(user)
    return user


async def set_map_visibility(db: AsyncSession, user_id: uuid.UUID, show_on_map: bool) -> User:
    user = await _get_managed_user(db, user_id)
    user.show_on_map = show_on_map
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: uuid.UUID) -> None:
    user = await _get_managed_user(db, user_id)
    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %s", user_id)


async def user_statistics(db: AsyncSession) -> UserStatistics:
    non_admin = User.role != UserRole.ADMIN
    stmt = select(
        func.count(User.id),
        func.count(User.id).filter(User.is_email_verified.is_(True)),
        func.count(User.id).filter(User.professional_type == ProfessionalType.DENTIST),
        func.count(User.id).filter(User.professional_type == ProfessionalType.ORTHODONTIST),
    ).where(non_admin)
    total, verified, dentists, orthodontists = (await db.execute(stmt)).one()
    return UserStatistics(
        total=total,
        verified=verified,
        unverified=total - verified,
        dentists=dentists,
        orthodontists=orthodontists,
    )


async def list_map_coordinates(db: AsyncSession) -> list[User]:
    result = await db.execute(
        select(User)
        .where(
            User.role != UserRole.ADMIN,
            User.show_on_map.is_(True),
            User.latitude.is_not(None),
            User.longitude.is_not(None),
        )
        .order_by(User.created_at.desc())
    )
    return list(result.scalars().all())


async def update_own_location(
    db: AsyncSession,
    user_id: uuid.UUID,
    location: str,
    geocoder: Geocoder,
    *,
    show_on_map: bool | None = None,
) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    coordinates = await geocoder.geocode(location)
    if coordinates is None:
        raise GeocodingFailedError()
    user.location = location
    user.latitude = coordinates.latitude
    user.longitude = coordinates.longitude
    if show_on_map is not None:
        user.show_on_map = show_on_map
    await db.flush()
    await db.refresh(user)
    return user
