"""Location ORM model (master data)."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nearh.infrastructure.persistence.database import Base
from nearh.infrastructure.persistence.models.mixins import CuidMixin


class Location(CuidMixin, Base):
    """City within a state. Table: locations. Unique (city, state)."""

    __tablename__ = "locations"

    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(120), nullable=False)

    __table_args__ = (UniqueConstraint("city", "state", name="uq_locations_city_state"),)
