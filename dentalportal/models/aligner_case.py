import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin


class AlignerCase(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """An aligner order placed on behalf of a practitioner."""

    __tablename__ = "aligner_cases"

    patient_name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        sa.CheckConstraint("quantity > 0", name="ck_aligner_cases_quantity_positive"),
    )
