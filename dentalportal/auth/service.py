"""Auth service: pure business logic, no FastAPI imports.

Signup, login, email verification and password reset. Email delivery is not
done here: functions that issue a token return it so the controller can
schedule the email.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import timedelta

from jose import jwt
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.auth.schemas import SignupRequest
from dentalportal.auth.utils import generate_token, hash_password, verify_password
from dentalportal.config import Settings
from dentalportal.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
)
from dentalportal.models.base import as_utc, utcnow
from dentalportal.models.enums import UserRole
from dentalportal.models.user import User


@dataclass(frozen=True)
class SignupResult:
    user: User
    message: str
    # None for administrators, who are verified on creation
    verification_token: str | None


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def create_access_token(user: User, settings: Settings) -> str:
    now = utcnow()
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=settings.jwt_expire_seconds)).timestamp()),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: uuid.UUID) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


# ---------------------------------------------------------------------------
# Signup / login
# ---------------------------------------------------------------------------


def _resolve_role(email: str, settings: Settings) -> UserRole:
    return UserRole.ADMIN if email.lower() in settings.admin_emails_list else UserRole.USER


async def signup(db: AsyncSession, body: SignupRequest, settings: Settings) -> SignupResult:
    email = body.email.lower()
    existing = await get_user_by_email(db, email)
    if existing is not None and existing.is_email_verified:
        raise ConflictError("Email already in use")

    role = _resolve_role(email, settings)
    is_admin = role == UserRole.ADMIN
    if not is_admin:
        if not body.clinic_name or not body.location:
            raise BadRequestError("Please provide clinic name and location")
        if not body.dci_registration_number:
            raise BadRequestError("Please provide DCI number.")

    now = utcnow()
    if existing is not None:
        expires_at = as_utc(existing.email_verification_expires_at)
        if expires_at is not None and expires_at > now:
            minutes_left = math.ceil((expires_at - now).total_seconds() / 60)
            raise ConflictError(
                "Verification email already sent. Please check your email or wait "
                f"{minutes_left} minutes before requesting a new one."
            )

    token = None if is_admin else generate_token()
    fields = dict(
        password_hash=hash_password(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        clinic_name=body.clinic_name,
        location=body.location,
        dci_registration_number=body.dci_registration_number,
        professional_type=body.professional_type,
        role=role,
        is_email_verified=is_admin,
        email_verification_token=token,
        email_verification_expires_at=(
            None if is_admin else now + timedelta(seconds=settings.email_verification_ttl_seconds)
        ),
    )

    if existing is not None:
        # Unverified account whose link expired: refresh it with the new details
        for key, value in fields.items():
            setattr(existing, key, value)
        user = existing
    else:
        user = User(email=email, **fields)
        db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Email already in use") from exc
    await db.refresh(user)

    if existing is not None:
        message = (
            "Account updated successfully" if is_admin
            else "New verification email sent successfully. Please check your email."
        )
    else:
        message = (
            "Account created successfully" if is_admin
            else "Account created successfully. Please check your email to verify your account."
        )
    return SignupResult(user=user, message=message, verification_token=token)


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User")
    if not user.is_email_verified:
        raise UnauthorizedError("Please verify your email address before logging in")
    if not user.is_active:
        raise UnauthorizedError("Your account is not active")
    if not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")
    return user


# ---------------------------------------------------------------------------
# Email verification
# ---------------------------------------------------------------------------


async def verify_email(db: AsyncSession, token: str) -> User:
    result = await db.execute(
        select(User).where(
            User.email_verification_token == token,
            User.email_verification_expires_at >= utcnow(),
        )
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise BadRequestError("Invalid or expired verification token")
    user.is_email_verified = True
    user.email_verification_token = None
    user.email_verification_expires_at = None
    await db.flush()
    await db.refresh(user)
    return user


async def resend_verification(db: AsyncSession, email: str, settings: Settings) -> tuple[User, str]:
    user = await get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User")
    if user.is_email_verified:
        raise BadRequestError("Email is already verified")
    token = generate_token()
    user.email_verification_token = token
    user.email_verification_expires_at = utcnow() + timedelta(
        seconds=settings.email_verification_ttl_seconds
    )
    await db.flush()
    return user, token


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------


async def request_password_reset(
    db: AsyncSession, email: str, settings: Settings
) -> tuple[User, str] | None:
    """Issue a reset token. Returns None for unknown emails so callers answer uniformly."""
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    token = generate_token()
    user.password_reset_token = token
    user.password_reset_expires_at = utcnow() + timedelta(seconds=settings.password_reset_ttl_seconds)
    await db.flush()
    return user, token


async def reset_password(db: AsyncSession, token: str, new_password: str) -> None:
    result = await db.execute(
        select(User).where(
            User.password_reset_token == token,
            User.password_reset_expires_at > utcnow(),
        )
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise BadRequestError("Invalid or expired reset token")
    user.password_hash = hash_password(new_password)
    user.password_reset_token = None
    user.password_reset_expires_at = None
    await db.flush()
