"""Request bodies and helpers shared by several domains."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dentalportal.exceptions import BadRequestError


class PublishRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    published_at: datetime | None = Field(
        default=None,
        description="Publication timestamp. Defaults to now.",
    )


class ToggleVisibilityRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    show_on_map: bool


class StatusCount(BaseModel):
    status: str
    count: int


def parse_uuid(raw: str, resource: str = "Resource") -> uuid.UUID:
    """Path ids arrive as strings; a malformed one is a 400, not a 404."""
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        raise BadRequestError(f"Invalid {resource.lower()} ID format") from None
