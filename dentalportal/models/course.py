import uuid
from decimal import Decimal

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin
from .content import PublishableMixin


class Course(UUIDPrimaryKeyMixin, PublishableMixin, TimestampMixin, Base):
    __tablename__ = "courses"

    description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    short_description: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    content: Mapped[str] = mapped_column(sa.Text, nullable=False)
    thumbnail_image: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    # External video link (YouTube, Vimeo, ...) entered by the creator
    video_url: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    # Uploaded video file, filled in by the background media task
    video_file: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    price: Mapped[Decimal] = mapped_column(
        sa.Numeric(10, 2), nullable=False, default=Decimal("0.00")
    )
    currency: Mapped[str] = mapped_column(sa.String(3), nullable=False, default="INR")
    is_free: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True)
    # NULL means unlimited
    max_enrollments: Mapped[int | None] = mapped_column(sa.Integer, nullable=True)
    enrollment_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    rating: Mapped[Decimal | None] = mapped_column(sa.Numeric(3, 2), nullable=True)
    review_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    created_by_id: Mapped[uuid.UUID | None] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by_name: Mapped[str] = mapped_column(sa.String(200), nullable=False, default="")

    __table_args__ = (
        sa.CheckConstraint("enrollment_count >= 0", name="ck_courses_enrollment_count_non_negative"),
    )

    @property
    def owner_id(self) -> uuid.UUID | None:
        return self.created_by_id
