"""Users (admin) domain Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dentalportal.auth.schemas import UserResponse
from dentalportal.models.enums import ProfessionalType, UserRole


class AdminUserResponse(UserResponse):
    dci_registration_number: str | None
    latitude: float | None
    longitude: float | None
    updated_at: datetime


class UpdateVerificationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    is_email_verified: bool


class UpdateLocationRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    location: str = Field(min_length=3, max_length=300)
    show_on_map: bool | None = Field(
        default=None, description="Also change map visibility when provided.",
    )


class UserCoordinates(BaseModel):
    """Public map pin for a practitioner."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    clinic_name: str | None
    location: str | None
    professional_type: ProfessionalType | None
    latitude: float
    longitude: float


class UserStatistics(BaseModel):
    total: int
    verified: int
    unverified: int
    dentists: int
    orthodontists: int


class UserFilters(BaseModel):
    role: UserRole | None = None
    is_email_verified: bool | None = None
