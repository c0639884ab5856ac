import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from .base import TimestampMixin, UUIDPrimaryKeyMixin


class MapUser(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A practice listed in the public "find a dentist" directory.

    Not a login account: admins curate these records directly. Coordinates
    come from geocoding ``location`` and are always present.
    """

    __tablename__ = "map_users"

    first_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    phone: Mapped[str] = mapped_column(sa.String(20), unique=True, nullable=False)
    location: Mapped[str] = mapped_column(sa.String(300), nullable=False, index=True)
    clinic_name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    zip_code: Mapped[str] = mapped_column(sa.String(12), nullable=False)
    show_on_map: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False, index=True)
    latitude: Mapped[float] = mapped_column(sa.Float, nullable=False)
    longitude: Mapped[float] = mapped_column(sa.Float, nullable=False)
