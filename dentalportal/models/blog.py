import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin
from .content import PublishableMixin


class Blog(UUIDPrimaryKeyMixin, PublishableMixin, TimestampMixin, Base):
    __tablename__ = "blogs"

    content: Mapped[str] = mapped_column(sa.Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    featured_image: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    is_for_dentist: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False)
    like_count: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Denormalized so cards render without a join on users
    author_name: Mapped[str] = mapped_column(sa.String(200), nullable=False, default="")

    @property
    def owner_id(self) -> uuid.UUID | None:
        return self.author_id
