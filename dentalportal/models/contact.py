import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin

MAX_CONTACT_MESSAGE_LENGTH = 500


class ContactQuery(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "contact_queries"

    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    email: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(sa.String(20), nullable=True)
    message: Mapped[str] = mapped_column(sa.String(MAX_CONTACT_MESSAGE_LENGTH), nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
