"""DTO for the authorization profile cached per identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nearh.domain.enums import ApprovalStatus, UserRole


@dataclass(frozen=True)
class CachedProfile:
    """Subset of a profile row needed for request-time authorization.

    Stored in the cache as a JSON object (to_cache / from_cache).
    """

    id: str
    role: UserRole
    status: ApprovalStatus
    associated_hospital_id: str | None = None

    @property
    def is_incompletely_provisioned(self) -> bool:
        """Admin without a linked hospital: a transient signup state that must not be cached."""
        return self.role is UserRole.ADMIN and not self.associated_hospital_id

    @property
    def is_approved(self) -> bool:
        return self.status is ApprovalStatus.APPROVED

    def to_cache(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role.value,
            "status": self.status.value,
            "associated_hospital_id": self.associated_hospital_id,
        }

    @classmethod
    def from_cache(cls, data: Any) -> CachedProfile:
        """Build from a cached JSON object.

        Raises:
            ValueError: If data is not a dict or has missing/invalid fields.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected dict for cached profile, got {type(data).__name__}")
        try:
            return cls(
                id=str(data["id"]),
                role=UserRole(data["role"]),
                status=ApprovalStatus(data["status"]),
                associated_hospital_id=data.get("associated_hospital_id"),
            )
        except KeyError as e:
            raise ValueError(f"Cached profile missing field: {e}") from e
