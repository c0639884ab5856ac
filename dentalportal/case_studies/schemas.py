"""Case study schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dentalportal.models.enums import Gender


class CaseStudyRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    age: int = Field(ge=0, le=130)
    case_description: str = Field(min_length=1)
    gender: Gender
    upper: int = Field(ge=0, description="Number of upper aligners.")
    lower: int = Field(ge=0, description="Number of lower aligners.")
    image_before: str | None = Field(default=None, max_length=500)
    image_after: str | None = Field(default=None, max_length=500)


class UpdateCaseStudyRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    age: int | None = Field(default=None, ge=0, le=130)
    case_description: str | None = Field(default=None, min_length=1)
    gender: Gender | None = None
    upper: int | None = Field(default=None, ge=0)
    lower: int | None = Field(default=None, ge=0)
    image_before: str | None = Field(default=None, max_length=500)
    image_after: str | None = Field(default=None, max_length=500)


class CaseStudyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    age: int
    case_description: str
    gender: Gender
    upper: int
    lower: int
    image_before: str | None
    image_after: str | None
    created_at: datetime
    updated_at: datetime
