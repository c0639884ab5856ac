"""User accounts, credentials and map presence."""

from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin
from .enums import ProfessionalType, UserRole, professional_type_enum, user_role_enum


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    # Stored lower-cased; lookups compare on the lower-cased value
    email: Mapped[str] = mapped_column(sa.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(sa.String(100), nullable=False, default="")
    phone: Mapped[str | None] = mapped_column(sa.String(20), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        user_role_enum, nullable=False, default=UserRole.USER, index=True
    )
    professional_type: Mapped[ProfessionalType | None] = mapped_column(
        professional_type_enum, nullable=True
    )

    # ── Practice ─────────────────────────────────────────────────────────────
    clinic_name: Mapped[str | None] = mapped_column(sa.String(200), nullable=True)
    location: Mapped[str | None] = mapped_column(sa.String(300), nullable=True)
    dci_registration_number: Mapped[str | None] = mapped_column(sa.String(50), nullable=True)
    latitude: Mapped[float | None] = mapped_column(sa.Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(sa.Float, nullable=True)
    show_on_map: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False)

    # ── Account state ────────────────────────────────────────────────────────
    is_email_verified: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True)
    email_verification_token: Mapped[str | None] = mapped_column(
        sa.String(128), nullable=True, index=True
    )
    email_verification_expires_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )
    password_reset_token: Mapped[str | None] = mapped_column(
        sa.String(128), nullable=True, index=True
    )
    password_reset_expires_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
