import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin
from .enums import LiveSessionStatus, live_session_status_enum


class LiveSession(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "live_sessions"

    title: Mapped[str] = mapped_column(sa.String(300), nullable=False)
    slug: Mapped[str] = mapped_column(sa.String(320), unique=True, nullable=False, index=True)
    description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    topic: Mapped[str | None] = mapped_column(sa.String(200), nullable=True)
    category: Mapped[str | None] = mapped_column(sa.String(100), nullable=True, index=True)
    tags: Mapped[list[str]] = mapped_column(sa.JSON, nullable=False, default=list)
    thumbnail_image: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)

    # ── Schedule ─────────────────────────────────────────────────────────────
    scheduled_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, index=True
    )
    timezone: Mapped[str] = mapped_column(sa.String(64), nullable=False, default="Asia/Kolkata")
    duration_minutes: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=60)
    started_at: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)

    # ── Meeting ──────────────────────────────────────────────────────────────
    meeting_link: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    meeting_id: Mapped[str | None] = mapped_column(sa.String(100), nullable=True)
    max_participants: Mapped[int | None] = mapped_column(sa.Integer, nullable=True)
    is_recorded: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False)
    recording_url: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    materials: Mapped[list[str]] = mapped_column(sa.JSON, nullable=False, default=list)

    status: Mapped[LiveSessionStatus] = mapped_column(
        live_session_status_enum, nullable=False, default=LiveSessionStatus.SCHEDULED, index=True
    )
    is_active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True)
    registration_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    attendance_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    host_id: Mapped[uuid.UUID | None] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    host_name: Mapped[str] = mapped_column(sa.String(200), nullable=False, default="")

    @property
    def owner_id(self) -> uuid.UUID | None:
        return self.host_id
