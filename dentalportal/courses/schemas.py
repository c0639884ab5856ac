"""Course and enrollment Pydantic V2 schemas.

Separate request models from response models. Enrollment responses embed a
small course summary so "my courses" renders without a second request.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime
from decimal import Decimal

from fastapi import UploadFile
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dentalportal.models.enums import ContentStatus, EnrollmentStatus

MIN_COURSE_TEXT_LENGTH = 50


def _split_tags(value):
    # Forms send tags as repeated fields, a JSON array or a comma-separated string
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return value
    tags: list = []
    for item in value:
        if not isinstance(item, str):
            tags.append(item)
        elif item.strip().startswith("["):
            tags.extend(json.loads(item))
        else:
            tags.extend(tag.strip() for tag in item.split(",") if tag.strip())
    return tags


# ---------------------------------------------------------------------------
# Course request schemas
# ---------------------------------------------------------------------------


class CreateCourseRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    description: str = Field(min_length=MIN_COURSE_TEXT_LENGTH)
    short_description: str | None = Field(default=None, max_length=500)
    content: str = Field(min_length=MIN_COURSE_TEXT_LENGTH)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    thumbnail_image: str | None = Field(default=None, max_length=500)
    video_url: str | None = Field(default=None, max_length=500)
    price: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="INR", min_length=3, max_length=3)
    is_free: bool = True
    is_active: bool = True
    max_enrollments: int | None = Field(
        default=None, ge=1, description="Capacity of ACTIVE enrollments. Null means unlimited.",
    )
    meta_title: str | None = Field(default=None, max_length=300)
    meta_description: str | None = Field(default=None, max_length=500)
    status: ContentStatus | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return _split_tags(value)

    @model_validator(mode="after")
    def free_courses_cost_nothing(self) -> "CreateCourseRequest":
        if self.is_free:
            self.price = Decimal("0.00")
        return self


class UpdateCourseRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, min_length=MIN_COURSE_TEXT_LENGTH)
    short_description: str | None = Field(default=None, max_length=500)
    content: str | None = Field(default=None, min_length=MIN_COURSE_TEXT_LENGTH)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None
    thumbnail_image: str | None = Field(default=None, max_length=500)
    video_url: str | None = Field(default=None, max_length=500)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    is_free: bool | None = None
    is_active: bool | None = None
    max_enrollments: int | None = Field(default=None, ge=1)
    meta_title: str | None = Field(default=None, max_length=300)
    meta_description: str | None = Field(default=None, max_length=500)
    status: ContentStatus | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return _split_tags(value)


MEDIA_FIELDS = frozenset({"thumbnail", "video"})


class CreateCourseWithMediaForm(CreateCourseRequest):
    """Multipart variant of :class:`CreateCourseRequest` carrying the media files."""

    thumbnail: UploadFile | None = None
    video: UploadFile | None = None

    def course_fields(self) -> CreateCourseRequest:
        return CreateCourseRequest.model_validate(self.model_dump(exclude=MEDIA_FIELDS))


class UpdateCourseWithMediaForm(UpdateCourseRequest):
    thumbnail: UploadFile | None = None
    video: UploadFile | None = None

    def changed_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude=MEDIA_FIELDS)


# ---------------------------------------------------------------------------
# Course response schemas
# ---------------------------------------------------------------------------


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    description: str
    short_description: str | None
    content: str
    category: str | None
    tags: list[str]
    thumbnail_image: str | None
    video_url: str | None
    video_file: str | None
    price: Decimal
    currency: str
    is_free: bool
    is_active: bool
    max_enrollments: int | None
    enrollment_count: int
    rating: Decimal | None
    review_count: int
    meta_title: str | None
    meta_description: str | None
    status: ContentStatus
    published_at: datetime | None
    view_count: int
    created_by_id: uuid.UUID | None
    created_by_name: str
    created_at: datetime
    updated_at: datetime


class CourseSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    thumbnail_image: str | None
    status: ContentStatus
    is_free: bool
    price: Decimal


class CourseStatistics(BaseModel):
    total: int
    published: int
    draft: int
    archived: int
    under_review: int
    total_views: int
    total_enrollments: int


class CourseFilters(BaseModel):
    status: ContentStatus | None = None
    category: str | None = None
    is_free: bool | None = None
    is_active: bool | None = None


# ---------------------------------------------------------------------------
# Enrollment schemas
# ---------------------------------------------------------------------------


class UpdateProgressRequest(BaseModel):
    progress: int = Field(ge=0, le=100, description="Completion percentage.")


class EnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    course_id: uuid.UUID
    status: EnrollmentStatus
    progress: int
    amount_paid: Decimal
    enrolled_at: datetime = Field(validation_alias="created_at")
    completed_at: datetime | None


class EnrollmentWithCourse(EnrollmentResponse):
    course: CourseSummary | None = None
