"""Media upload schemas."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from dentalportal.integrations.storage import UploadedFile

DEFAULT_FOLDER = "uploads"


def parse_tags(raw: str | list[str] | None) -> list[str]:
    """Tags arrive as a JSON array or a comma-separated string."""
    if raw is None:
        return []
    if isinstance(raw, list):
        items: list[str] = []
        for value in raw:
            items.extend(parse_tags(value))
        return items
    raw = raw.strip()
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(tag).strip() for tag in parsed if str(tag).strip()]
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


class UploadFromUrlRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    url: HttpUrl
    folder: str = Field(default=DEFAULT_FOLDER, min_length=1, max_length=200)
    name: str | None = Field(default=None, max_length=255, description="Defaults to the URL's file name.")
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return parse_tags(value)


class MediaFileResponse(UploadedFile):
    pass


class DeletedFileResponse(BaseModel):
    file_id: str
