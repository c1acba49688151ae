"""UserAccount ORM model: credentials for an identity."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from nearh.infrastructure.persistence.database import Base
from nearh.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class UserAccount(CuidMixin, CreatedAtMixin, Base):
    """Login credentials. Table: user_account. id is the identity (JWT sub)."""

    __tablename__ = "user_account"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
