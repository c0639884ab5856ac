"""
Auth router: HTTP concerns only.

Route declarations, status codes, dependency injection and rate limits;
everything else is delegated to the controller.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.auth import controller
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
from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, get_mailer, get_settings
from dentalportal.email.send import Mailer
from dentalportal.rate_limit import limiter
from shared.models.pagination import ApiResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=ApiResponse[UserResponse],
    status_code=201,
    summary="Create an account",
    description="Emails on the ADMIN_EMAILS allowlist become verified administrators. "
    "Everyone else must provide clinic name, location and DCI number and "
    "receives a 24-hour verification link.",
)
@limiter.limit("10/hour")
async def signup(
    request: Request,
    body: SignupRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
) -> ApiResponse[UserResponse]:
    return await controller.signup(db, body, settings, mailer, background_tasks)


@router.post(
    "/login",
    response_model=ApiResponse[LoginData],
    summary="Log in with email and password",
    description="Sets the HTTP-only `access_token` cookie and also returns the token.",
)
@limiter.limit("10/minute")
async def login(
    request: Request,
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginData]:
    return await controller.login(db, body, settings, response)


@router.post("/logout", response_model=ApiResponse[None], summary="Clear the auth cookie")
async def logout(response: Response) -> ApiResponse[None]:
    return controller.logout(response)


@router.get("/me", response_model=ApiResponse[UserResponse], summary="Get the logged-in user")
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[UserResponse]:
    return await controller.get_logged_in_user(db, current_user.id)


@router.post(
    "/forgot-password",
    response_model=ApiResponse[None],
    summary="Request a password reset link",
    description="Always answers the same way so account existence is not revealed.",
)
@limiter.limit("5/minute")
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
) -> ApiResponse[None]:
    return await controller.forgot_password(db, body, settings, mailer, background_tasks)


@router.post("/reset-password", response_model=ApiResponse[None], summary="Set a new password")
@limiter.limit("10/minute")
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    return await controller.reset_password(db, body)


@router.post("/verify-email", response_model=ApiResponse[UserResponse], summary="Confirm an email address")
async def verify_email(
    body: VerifyEmailRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
) -> ApiResponse[UserResponse]:
    return await controller.verify_email(db, body, settings, mailer, background_tasks)


@router.post(
    "/resend-verification",
    response_model=ApiResponse[None],
    summary="Send a fresh verification link",
)
@limiter.limit("5/minute")
async def resend_verification(
    request: Request,
    body: ResendVerificationRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
) -> ApiResponse[None]:
    return await controller.resend_verification(db, body, settings, mailer, background_tasks)
