"""initial_schema_accounts_profiles_hospitals_master_data

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-02-02 10:12:41.508113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = postgresql.ENUM("user", "admin", "superadmin", name="user_role", create_type=False)
approval_status = postgresql.ENUM(
    "pending", "approved", "rejected", name="approval_status", create_type=False
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    user_role.create(op.get_bind(), checkfirst=True)
    approval_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "locations",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("state", sa.String(length=120), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("city", "state", name="uq_locations_city_state"),
    )
    op.create_index("ix_locations_city", "locations", ["city"])

    op.create_table(
        "services_list",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("service_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("service_name"),
    )

    op.create_table(
        "specialties_list",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("specialty_name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("specialty_name"),
    )

    op.create_table(
        "user_account",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "hospitals",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("official_email", sa.String(length=320), nullable=True),
        sa.Column("official_phone", sa.String(length=32), nullable=True),
        sa.Column("emergency_contact", sa.String(length=32), nullable=True),
        sa.Column("website_url", sa.String(length=512), nullable=True),
        sa.Column("location_id", sa.String(), nullable=True),
        sa.Column(
            "has_ayushman_bharat", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("trauma_level", sa.Integer(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_hospitals_location_id", "hospitals", ["location_id"])

    op.create_table(
        "hospital_services",
        sa.Column("hospital_id", sa.String(), nullable=False),
        sa.Column("service_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("hospital_id", "service_id"),
        sa.ForeignKeyConstraint(["hospital_id"], ["hospitals.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["service_id"], ["services_list.id"], ondelete="RESTRICT"),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("phone_number", sa.String(length=32), nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="user"),
        sa.Column("status", approval_status, nullable=False, server_default="pending"),
        sa.Column("associated_hospital_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["id"], ["user_account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["associated_hospital_id"], ["hospitals.id"], ondelete="SET NULL"
        ),
    )
    op.create_index("ix_profiles_associated_hospital_id", "profiles", ["associated_hospital_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_profiles_associated_hospital_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_table("hospital_services")
    op.drop_index("ix_hospitals_location_id", table_name="hospitals")
    op.drop_table("hospitals")
    op.drop_table("user_account")
    op.drop_table("specialties_list")
    op.drop_table("services_list")
    op.drop_index("ix_locations_city", table_name="locations")
    op.drop_table("locations")
    approval_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
