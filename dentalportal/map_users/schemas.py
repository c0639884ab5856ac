"""Map user (practice directory) schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

_PHONE_PATTERN = r"^\+?[0-9][0-9 \-]{6,18}$"


class CreateMapUserRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str = Field(pattern=_PHONE_PATTERN)
    location: str = Field(min_length=3, max_length=300)
    clinic_name: str = Field(min_length=1, max_length=200)
    zip_code: str = Field(min_length=3, max_length=12)
    show_on_map: bool = False


class UpdateMapUserRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, pattern=_PHONE_PATTERN)
    location: str | None = Field(default=None, min_length=3, max_length=300)
    clinic_name: str | None = Field(default=None, min_length=1, max_length=200)
    zip_code: str | None = Field(default=None, min_length=3, max_length=12)
    show_on_map: bool | None = None


class MapUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    phone: str
    location: str
    clinic_name: str
    zip_code: str
    show_on_map: bool
    latitude: float
    longitude: float
    created_at: datetime
    updated_at: datetime


class LocationCount(BaseModel):
    location: str
    count: int


class MapUserStatistics(BaseModel):
    total: int
    visible: int
    hidden: int
    popular_locations: list[LocationCount]
