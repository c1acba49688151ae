"""Hospital and HospitalService ORM models."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from nearh.infrastructure.persistence.database import Base
from nearh.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Hospital(CuidMixin, TimestampMixin, Base):
    """Registered hospital. Table: hospitals. Unverified until a superadmin approves it."""

    __tablename__ = "hospitals"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    official_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    official_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    emergency_contact: Mapped[str | None] = mapped_column(String(32), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    location_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("locations.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    has_ayushman_bharat: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    trauma_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )


class HospitalService(Base):
    """Services offered by a hospital. Table: hospital_services. Composite primary key."""

    __tablename__ = "hospital_services"

    hospital_id: Mapped[str] = mapped_column(
        String, ForeignKey("hospitals.id", ondelete="CASCADE"), primary_key=True
    )
    service_id: Mapped[str] = mapped_column(
        String, ForeignKey("services_list.id", ondelete="RESTRICT"), primary_key=True
    )
