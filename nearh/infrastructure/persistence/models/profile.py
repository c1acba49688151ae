"""Profile ORM model: role, approval status and hospital link per identity."""

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.infrastructure.persistence.database import Base
from nearh.infrastructure.persistence.models.mixins import TimestampMixin


class Profile(TimestampMixin, Base):
    """Profile. Table: profiles. Primary key shared with user_account (cascade delete)."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        String, ForeignKey("user_account.id", ondelete="CASCADE"), primary_key=True
    )
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.USER,
    )
    status: Mapped[ApprovalStatus] = mapped_column(
        Enum(
            ApprovalStatus,
            name="approval_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    associated_hospital_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("hospitals.id", ondelete="SET NULL"), nullable=True, index=True
    )
