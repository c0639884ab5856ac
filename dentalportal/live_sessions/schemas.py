"""Live session Pydantic schemas.

A naive ``scheduled_at`` is read as wall-clock time in the session's
``timezone`` and stored in UTC.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dentalportal.models.enums import LiveSessionStatus

DEFAULT_TIMEZONE = "Asia/Kolkata"
MIN_DURATION_MINUTES = 15


def to_utc(value: datetime, tz_name: str | None) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(tz_name or DEFAULT_TIMEZONE))
    return value.astimezone(dt_timezone.utc)


def _check_timezone(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {value}") from None
    return value


class CreateLiveSessionRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    description: str = Field(min_length=1)
    topic: str | None = Field(default=None, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    thumbnail_image: str | None = Field(default=None, max_length=500)
    scheduled_at: datetime
    timezone: str = DEFAULT_TIMEZONE
    duration_minutes: int = Field(default=60, ge=MIN_DURATION_MINUTES)
    meeting_link: str | None = Field(default=None, max_length=500)
    meeting_id: str | None = Field(default=None, max_length=100)
    max_participants: int | None = Field(default=None, ge=1)
    is_recorded: bool = False
    recording_url: str | None = Field(default=None, max_length=500)
    materials: list[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        return _check_timezone(value)

    @model_validator(mode="after")
    def scheduled_at_in_utc(self) -> "CreateLiveSessionRequest":
        self.scheduled_at = to_utc(self.scheduled_at, self.timezone)
        return self


class UpdateLiveSessionRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, min_length=1)
    topic: str | None = Field(default=None, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None
    thumbnail_image: str | None = Field(default=None, max_length=500)
    scheduled_at: datetime | None = None
    timezone: str | None = None
    duration_minutes: int | None = Field(default=None, ge=MIN_DURATION_MINUTES)
    meeting_link: str | None = Field(default=None, max_length=500)
    meeting_id: str | None = Field(default=None, max_length=100)
    max_participants: int | None = Field(default=None, ge=1)
    is_recorded: bool | None = None
    recording_url: str | None = Field(default=None, max_length=500)
    materials: list[str] | None = None
    is_active: bool | None = None

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str | None) -> str | None:
        return _check_timezone(value)


class RescheduleRequest(BaseModel):
    scheduled_at: datetime
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str | None) -> str | None:
        return _check_timezone(value)


class LiveSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    description: str
    topic: str | None
    category: str | None
    tags: list[str]
    thumbnail_image: str | None
    scheduled_at: datetime
    timezone: str
    duration_minutes: int
    started_at: datetime | None
    ended_at: datetime | None
    meeting_link: str | None
    meeting_id: str | None
    max_participants: int | None
    is_recorded: bool
    recording_url: str | None
    materials: list[str]
    status: LiveSessionStatus
    is_active: bool
    registration_count: int
    attendance_count: int
    view_count: int
    host_id: uuid.UUID | None
    host_name: str
    created_at: datetime
    updated_at: datetime


class LiveSessionStatistics(BaseModel):
    total: int
    scheduled: int
    live: int
    completed: int
    cancelled: int
    postponed: int
    total_views: int
    total_registrations: int


class LiveSessionFilters(BaseModel):
    status: LiveSessionStatus | None = None
    category: str | None = None
    topic: str | None = None
    is_active: bool | None = None
