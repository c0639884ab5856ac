"""Aligner case and aligner process schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateAlignerCaseRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    patient_name: str = Field(min_length=1, max_length=200)
    quantity: int = Field(gt=0)
    user_id: uuid.UUID = Field(description="Practitioner the case is placed for.")


class UpdateAlignerCaseRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    patient_name: str | None = Field(default=None, min_length=1, max_length=200)
    quantity: int | None = Field(default=None, gt=0)
    user_id: uuid.UUID | None = None


class AlignerCaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    patient_name: str
    quantity: int
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class AlignerCaseStatistics(BaseModel):
    total_cases: int
    total_quantity: int
    practitioners: int
    cases_this_month: int


class AlignerProcessRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    video_url: str = Field(min_length=1, max_length=500)


class AlignerProcessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    video_url: str
    updated_at: datetime
