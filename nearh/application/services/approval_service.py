"""Superadmin approval flows: approve, reject-and-purge, status change.

Each flow commits its row changes, then deletes the affected profile's cache
entry so the next request sees the new role/status.
"""

from __future__ import annotations

import logging

from nearh.application.dtos.profile import CachedProfile
from nearh.application.interfaces.repositories import (
    IHospitalRepository,
    IProfileRepository,
    IUserAccountRepository,
)
from nearh.application.interfaces.services import IProfileInvalidator, IUnitOfWork
from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class ApprovalService:
    def __init__(
        self,
        uow: IUnitOfWork,
        profiles: IProfileRepository,
        hospitals: IHospitalRepository,
        accounts: IUserAccountRepository,
        profile_cache: IProfileInvalidator,
    ) -> None:
        self.uow = uow
        self.profiles = profiles
        self.hospitals = hospitals
        self.accounts = accounts
        self.profile_cache = profile_cache

    async def _load(self, profile_id: str) -> CachedProfile:
        profile = await self.profiles.get_authorization_profile(profile_id)
        if profile is None:
            raise ResourceNotFoundException("profile", profile_id)
        return profile

    @staticmethod
    def _hospital_for(profile: CachedProfile, hospital_id: str | None) -> str:
        resolved = hospital_id or profile.associated_hospital_id
        if not resolved:
            raise ValidationException("Profile has no associated hospital", field="hospital_id")
        return resolved

    async def approve_hospital(
        self, profile_id: str, hospital_id: str | None = None
    ) -> CachedProfile:
        """Verify the hospital and approve its admin.

        Raises:
            ResourceNotFoundException: Profile or hospital does not exist.
            ConflictException: Profile is already approved.
        """
        async with self.uow.begin():
            profile = await self._load(profile_id)
            if profile.is_approved:
                raise ConflictException("This user is already approved.", profile_id=profile_id)
            target = self._hospital_for(profile, hospital_id)
            if not await self.hospitals.mark_verified(target):
                raise ResourceNotFoundException("hospital", target)
            updated = await self.profiles.update_profile(
                profile_id, role=UserRole.ADMIN, status=ApprovalStatus.APPROVED
            )
        await self.profile_cache.invalidate_profile(profile_id)
        logger.info("Approved admin %s and verified hospital %s", profile_id, target)
        return updated or profile

    async def reject_and_purge(self, profile_id: str, hospital_id: str | None = None) -> None:
        """Delete an unverified hospital and its admin's profile and account.

        Raises:
            ResourceNotFoundException: Profile does not exist.
            ConflictException: Hospital is verified (deactivate it instead).
        """
        async with self.uow.begin():
            profile = await self._load(profile_id)
            target = hospital_id or profile.associated_hospital_id
            if target:
                if await self.hospitals.is_verified(target):
                    raise ConflictException(
                        "Cannot delete a verified hospital. Deactivate it instead.",
                        hospital_id=target,
                    )
                await self.hospitals.delete_hospital(target)
            await self.profiles.delete_profile(profile_id)
            await self.accounts.delete_account(profile_id)
        await self.profile_cache.invalidate_profile(profile_id)
        logger.info("Rejected and purged profile %s (hospital %s)", profile_id, target)

    async def set_status(self, profile_id: str, status: ApprovalStatus) -> CachedProfile:
        """Change approval status only.

        Raises:
            ResourceNotFoundException: Profile does not exist.
        """
        async with self.uow.begin():
            updated = await self.profiles.update_profile(profile_id, status=status)
            if updated is None:
                raise ResourceNotFoundException("profile", profile_id)
        await self.profile_cache.invalidate_profile(profile_id)
        logger.info("Profile %s status set to %s", profile_id, status.value)
        return updated
