"""
Auth domain: Pydantic V2 request/response schemas.

Request models are strict (extra="forbid"); response models never expose
password hashes or one-time tokens.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from dentalportal.models.enums import ProfessionalType, UserRole


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Requests ──────────────────────────────────────────────────────────────────

class SignupRequest(_Base):
    """Body for POST /auth/signup.

    Clinic name, location and DCI number are optional in the schema because
    allow-listed administrators sign up without them; the service enforces
    them for everyone else.
    """

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    phone: str | None = Field(default=None, pattern=r"^\+?[0-9]{7,15}$")
    clinic_name: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=300)
    dci_registration_number: str | None = Field(default=None, max_length=50)
    professional_type: ProfessionalType | None = None


class LoginRequest(_Base):
    email: EmailStr
    password: str = Field(min_length=1)


class ForgotPasswordRequest(_Base):
    email: EmailStr


class ResetPasswordRequest(_Base):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=128)


class VerifyEmailRequest(_Base):
    token: str = Field(min_length=1)


class ResendVerificationRequest(_Base):
    email: EmailStr


# ── Responses ─────────────────────────────────────────────────────────────────

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    phone: str | None
    role: UserRole
    professional_type: ProfessionalType | None
    clinic_name: str | None
    location: str | None
    is_email_verified: bool
    is_active: bool
    show_on_map: bool
    created_at: datetime


class LoginData(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int
