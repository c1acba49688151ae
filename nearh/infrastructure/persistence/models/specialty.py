"""Specialty ORM model (master data)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from nearh.infrastructure.persistence.database import Base
from nearh.infrastructure.persistence.models.mixins import CuidMixin


class Specialty(CuidMixin, Base):
    """Table: specialties_list. specialty_name is unique."""

    __tablename__ = "specialties_list"

    specialty_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
