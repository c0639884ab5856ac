"""Auth controller: request orchestration.

Calls the service, schedules transactional emails as background tasks,
manages the access-token cookie and wraps results in the response envelope.
"""
from __future__ import annotations

import uuid

from fastapi import BackgroundTasks, Response
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.auth import service
from dentalportal.auth.schemas import (
    ForgotPasswordRequest,
    LoginData,
    LoginRequest,
    ResendVerificationRequest,
    ResetPasswordRequest,
    SignupRequest,
    UserResponse,
    VerifyEmailRequest,
)
from dentalportal.config import Settings
from dentalportal.email.send import Mailer
from dentalportal.email.templates import EmailKind
from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.models.user import User
from shared.auth.dependencies import get_auth_settings
from shared.models.pagination import ApiResponse

_RESET_REQUESTED = "If the email exists, a password reset link has been sent."


def _schedule_verification_email(
    background_tasks: BackgroundTasks, mailer: Mailer, user: User, token: str, settings: Settings,
) -> None:
    background_tasks.add_task(
        mailer.send_template,
        EmailKind.EMAIL_VERIFICATION,
        user.email,
        {
            "first_name": user.first_name,
            "registration_date": user.created_at.strftime("%B %d, %Y"),
            "verification_url": f"{settings.frontend_url}/verify-email?token={token}",
        },
    )


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=get_auth_settings().cookie_name,
        value=token,
        max_age=settings.jwt_expire_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


async def signup(
    db: AsyncSession,
    body: SignupRequest,
    settings: Settings,
    mailer: Mailer,
    background_tasks: BackgroundTasks,
) -> ApiResponse[UserResponse]:
    try:
        result = await service.signup(db, body, settings)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    if result.verification_token is not None:
        _schedule_verification_email(
            background_tasks, mailer, result.user, result.verification_token, settings,
        )
    return ApiResponse(message=result.message, data=UserResponse.model_validate(result.user))


async def login(
    db: AsyncSession,
    body: LoginRequest,
    settings: Settings,
    response: Response,
) -> ApiResponse[LoginData]:
    try:
        user = await service.authenticate(db, body.email, body.password)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    token = service.create_access_token(user, settings)
    _set_auth_cookie(response, token, settings)
    return ApiResponse(
        message="Login successful",
        data=LoginData(
            user=UserResponse.model_validate(user),
            access_token=token,
            expires_in=settings.jwt_expire_seconds,
        ),
    )


def logout(response: Response) -> ApiResponse[None]:
    response.delete_cookie(key=get_auth_settings().cookie_name, path="/")
    return ApiResponse(message="Logged out successfully")


async def get_logged_in_user(db: AsyncSession, user_id: uuid.UUID) -> ApiResponse[UserResponse]:
    try:
        user = await service.get_user_by_id(db, user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="User retrieved successfully", data=UserResponse.model_validate(user))


async def forgot_password(
    db: AsyncSession,
    body: ForgotPasswordRequest,
    settings: Settings,
    mailer: Mailer,
    background_tasks: BackgroundTasks,
) -> ApiResponse[None]:
    issued = await service.request_password_reset(db, body.email, settings)
    if issued is not None:
        user, token = issued
        background_tasks.add_task(
            mailer.send_template,
            EmailKind.PASSWORD_RESET,
            user.email,
            {
                "first_name": user.first_name,
                "reset_url": f"{settings.frontend_url}/forgot-password?token={token}",
            },
        )
    return ApiResponse(message=_RESET_REQUESTED)


async def reset_password(db: AsyncSession, body: ResetPasswordRequest) -> ApiResponse[None]:
    try:
        await service.reset_password(db, body.token, body.new_password)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Password reset successfully")


async def verify_email(
    db: AsyncSession,
    body: VerifyEmailRequest,
    settings: Settings,
    mailer: Mailer,
    background_tasks: BackgroundTasks,
) -> ApiResponse[UserResponse]:
    try:
        user = await service.verify_email(db, body.token)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    background_tasks.add_task(
        mailer.send_template,
        EmailKind.WELCOME,
        user.email,
        {"first_name": user.first_name, "login_url": f"{settings.frontend_url}/login"},
    )
    return ApiResponse(message="Email verified successfully", data=UserResponse.model_validate(user))


async def resend_verification(
    db: AsyncSession,
    body: ResendVerificationRequest,
    settings: Settings,
    mailer: Mailer,
    background_tasks: BackgroundTasks,
) -> ApiResponse[None]:
    try:
        user, token = await service.resend_verification(db, body.email, settings)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    _schedule_verification_email(background_tasks, mailer, user, token, settings)
    return ApiResponse(message="Verification email sent successfully")
