"""Ebook domain Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dentalportal.models.enums import ContentStatus


class CreateEbookRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    description: str = Field(min_length=1)
    author: str = Field(min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    cover_image: str | None = Field(default=None, max_length=500)
    pdf_url: str | None = Field(default=None, max_length=500)
    preview_images: list[str] = Field(default_factory=list)
    page_count: int | None = Field(default=None, ge=1)
    language: str = Field(default="English", max_length=50)
    isbn: str | None = Field(default=None, max_length=20)
    edition_published_on: date | None = None
    price: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    is_free: bool = True
    is_downloadable: bool = True
    meta_title: str | None = Field(default=None, max_length=300)
    meta_description: str | None = Field(default=None, max_length=500)
    status: ContentStatus | None = None

    @model_validator(mode="after")
    def free_ebooks_cost_nothing(self) -> "CreateEbookRequest":
        if self.is_free:
            self.price = Decimal("0.00")
        return self


class UpdateEbookRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=300)
    slug: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None
    cover_image: str | None = Field(default=None, max_length=500)
    pdf_url: str | None = Field(default=None, max_length=500)
    preview_images: list[str] | None = None
    page_count: int | None = Field(default=None, ge=1)
    language: str | None = Field(default=None, max_length=50)
    isbn: str | None = Field(default=None, max_length=20)
    edition_published_on: date | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_free: bool | None = None
    is_downloadable: bool | None = None
    meta_title: str | None = Field(default=None, max_length=300)
    meta_description: str | None = Field(default=None, max_length=500)
    status: ContentStatus | None = None


class EbookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    description: str
    author: str
    category: str | None
    tags: list[str]
    cover_image: str | None
    pdf_url: str | None
    preview_images: list[str]
    page_count: int | None
    language: str
    isbn: str | None
    edition_published_on: date | None
    price: Decimal
    is_free: bool
    is_downloadable: bool
    download_count: int
    meta_title: str | None
    meta_description: str | None
    status: ContentStatus
    published_at: datetime | None
    view_count: int
    uploaded_by_id: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class EbookDownload(BaseModel):
    id: uuid.UUID
    title: str
    pdf_url: str
    download_count: int


class EbookStatistics(BaseModel):
    total: int
    published: int
    draft: int
    archived: int
    under_review: int
    total_views: int
    total_downloads: int


class EbookFilters(BaseModel):
    status: ContentStatus | None = None
    category: str | None = None
    language: str | None = None
    is_free: bool | None = None
