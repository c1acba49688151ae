"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from nearh.domain.enums import ApprovalStatus, UserRole

if TYPE_CHECKING:
    from nearh.application.dtos.master_data import MasterItem
    from nearh.application.dtos.profile import CachedProfile


# Profile read path used by the authorization profile cache
class IProfileReader(Protocol):
    """Row-fetch-by-key for authorization profiles."""

    async def get_authorization_profile(self, profile_id: str) -> CachedProfile | None:
        """Return the authorization fields of a profile, or None if no row exists."""


class IProfileRepository(IProfileReader, Protocol):
    """Profile writes used by signup and approval flows."""

    async def create_profile(
        self,
        profile_id: str,
        full_name: str | None,
        role: UserRole,
        status: ApprovalStatus,
        associated_hospital_id: str | None,
    ) -> CachedProfile:
        """Insert a profile row for an identity."""

    async def update_profile(
        self,
        profile_id: str,
        *,
        role: UserRole | None = None,
        status: ApprovalStatus | None = None,
    ) -> CachedProfile | None:
        """Update role and/or status; return None if the profile does not exist."""

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete the profile row. Returns True if a row was deleted."""


# Master-data read path used by the master-data cache
class IMasterListReader(Protocol):
    """Row-fetch-by-predicate for one master list, in its stable display order."""

    async def list_all(self) -> list[MasterItem]:
        """Return the complete ordered list. Raises MasterDataFetchError on failure."""


class IMasterListRepository(IMasterListReader, Protocol):
    """CRUD for one master list (superadmin back office)."""

    async def create_item(self, **fields: Any) -> MasterItem:
        """Insert a row. Raises DuplicateResourceException on unique violation."""

    async def update_item(self, item_id: str, **fields: Any) -> MasterItem | None:
        """Update a row; None if not found. Raises DuplicateResourceException on unique violation."""

    async def delete_item(self, item_id: str) -> bool:
        """Delete a row; False if not found. Raises ResourceInUseException when referenced."""


class IUserAccountRepository(Protocol):
    """Credential store for identities."""

    async def create_account(self, email: str, password: str) -> str:
        """Create an account and return its id. Raises DuplicateResourceException on duplicate email."""

    async def authenticate(self, email: str, password: str) -> str | None:
        """Return the account id when email/password match, else None."""

    async def delete_account(self, account_id: str) -> bool:
        """Delete the account. Returns True if a row was deleted."""


class IHospitalRepository(Protocol):
    """Hospital rows touched by signup, approval and profile update."""

    async def create_hospital(self, **fields: Any) -> str:
        """Insert a hospital and return its id."""

    async def is_verified(self, hospital_id: str) -> bool | None:
        """Return verification flag, or None if the hospital does not exist."""

    async def mark_verified(self, hospital_id: str) -> bool:
        """Set is_verified; False if the hospital does not exist."""

    async def update_hospital(self, hospital_id: str, **fields: Any) -> bool:
        """Update hospital columns; False if the hospital does not exist."""

    async def replace_services(self, hospital_id: str, service_ids: list[str]) -> None:
        """Replace the hospital's offered services with service_ids."""

    async def delete_hospital(self, hospital_id: str) -> bool:
        """Delete the hospital. Returns True if a row was deleted."""
