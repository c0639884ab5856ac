"""Columns shared by the publishable content types (blogs, courses, ebooks)."""

from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .enums import ContentStatus, content_status_enum


class PublishableMixin:
    title: Mapped[str] = mapped_column(sa.String(300), nullable=False)
    slug: Mapped[str] = mapped_column(sa.String(320), unique=True, nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(sa.String(100), nullable=True, index=True)
    tags: Mapped[list[str]] = mapped_column(sa.JSON, nullable=False, default=list)
    meta_title: Mapped[str | None] = mapped_column(sa.String(300), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    status: Mapped[ContentStatus] = mapped_column(
        content_status_enum, nullable=False, default=ContentStatus.DRAFT, index=True
    )
    # Non-null exactly when status == PUBLISHED
    published_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )
    view_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
