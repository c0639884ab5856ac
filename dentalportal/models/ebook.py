import uuid
from datetime import date
from decimal import Decimal

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin
from .content import PublishableMixin


class Ebook(UUIDPrimaryKeyMixin, PublishableMixin, TimestampMixin, Base):
    __tablename__ = "ebooks"

    description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    author: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    cover_image: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    pdf_url: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    preview_images: Mapped[list[str]] = mapped_column(sa.JSON, nullable=False, default=list)
    page_count: Mapped[int | None] = mapped_column(sa.Integer, nullable=True)
    language: Mapped[str] = mapped_column(sa.String(50), nullable=False, default="English")
    isbn: Mapped[str | None] = mapped_column(sa.String(20), nullable=True)
    edition_published_on: Mapped[date | None] = mapped_column(sa.Date, nullable=True)
    price: Mapped[Decimal] = mapped_column(
        sa.Numeric(10, 2), nullable=False, default=Decimal("0.00")
    )
    is_free: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True)
    is_downloadable: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True)
    download_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    uploaded_by_id: Mapped[uuid.UUID | None] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    @property
    def owner_id(self) -> uuid.UUID | None:
        return self.uploaded_by_id
