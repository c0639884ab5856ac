"""Blog domain Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dentalportal.models.enums import ContentStatus


class CreateBlogRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    slug: str | None = Field(
        default=None, max_length=300, description="Generated from the title when omitted.",
    )
    content: str = Field(min_length=1)
    excerpt: str | None = Field(default=None, max_length=500)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    featured_image: str | None = Field(default=None, max_length=500)
    meta_title: str | None = Field(default=None, max_length=300)
    meta_description: str | None = Field(default=None, max_length=500)
    is_for_dentist: bool = False
    status: ContentStatus | None = None


class UpdateBlogRequest(BaseModel):
    """Partial update. Only fields present in the body are changed."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    content: str | None = Field(default=None, min_length=1)
    excerpt: str | None = Field(default=None, max_length=500)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None
    featured_image: str | None = Field(default=None, max_length=500)
    meta_title: str | None = Field(default=None, max_length=300)
    meta_description: str | None = Field(default=None, max_length=500)
    is_for_dentist: bool | None = None
    status: ContentStatus | None = None


class BlogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    content: str
    excerpt: str | None
    category: str | None
    tags: list[str]
    featured_image: str | None
    meta_title: str | None
    meta_description: str | None
    is_for_dentist: bool
    status: ContentStatus
    published_at: datetime | None
    view_count: int
    like_count: int
    author_id: uuid.UUID | None
    author_name: str
    created_at: datetime
    updated_at: datetime


class BlogStatistics(BaseModel):
    total: int
    published: int
    draft: int
    archived: int
    under_review: int
    total_views: int
    total_likes: int


class BlogFilters(BaseModel):
    status: ContentStatus | None = None
    category: str | None = None
    author_id: uuid.UUID | None = None
    is_for_dentist: bool | None = None
