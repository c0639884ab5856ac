"""Marketing content: case studies, testimonials and the aligner process video."""

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin
from .enums import Gender, gender_enum


class CaseStudy(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "case_studies"

    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    age: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False)
    case_description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    gender: Mapped[Gender] = mapped_column(gender_enum, nullable=False)
    # Aligner counts per arch
    upper: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)
    lower: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)
    image_before: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    image_after: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)


class Testimonial(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "testimonials"

    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    image_url: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    message: Mapped[str] = mapped_column(sa.Text, nullable=False)


class AlignerProcess(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Single-row table holding the "how aligners work" video."""

    __tablename__ = "aligner_process"

    video_url: Mapped[str] = mapped_column(sa.String(500), nullable=False)
