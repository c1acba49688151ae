"""Domain enumerations for NearH.

Enums represent fixed sets of domain values (roles, approval status,
master-data list kinds).
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of an identity. USER is the unprivileged default (no admin rights)."""

    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]


class ApprovalStatus(str, Enum):
    """Approval lifecycle of a hospital admin profile.

    Pending profiles are held in the waiting room until a superadmin
    approves or rejects them.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class MasterListType(str, Enum):
    """Reference lists cached organization-wide. Value is the cache key suffix."""

    LOCATIONS = "locations"
    SERVICES = "services"
    SPECIALTIES = "specialties"
