"""ServiceListItem ORM model (master data: hospital service catalog)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from nearh.infrastructure.persistence.database import Base
from nearh.infrastructure.persistence.models.mixins import CuidMixin


class ServiceListItem(CuidMixin, Base):
    """Table: services_list. service_name is unique."""

    __tablename__ = "services_list"

    service_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
