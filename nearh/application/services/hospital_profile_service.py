"""Hospital admin profile update: hospital columns plus offered services."""

from __future__ import annotations

import logging

from nearh.application.dtos.hospital import HospitalProfileChanges
from nearh.application.dtos.profile import CachedProfile
from nearh.application.interfaces.repositories import IHospitalRepository
from nearh.application.interfaces.services import IProfileInvalidator, IUnitOfWork
from nearh.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class HospitalProfileService:
    def __init__(
        self,
        uow: IUnitOfWork,
        hospitals: IHospitalRepository,
        profile_cache: IProfileInvalidator,
    ) -> None:
        self.uow = uow
        self.hospitals = hospitals
        self.profile_cache = profile_cache

    async def update_hospital_profile(
        self, profile: CachedProfile, changes: HospitalProfileChanges
    ) -> str:
        """Apply changes to the caller's hospital and return its id.

        service_ids, when given, replaces the hospital_services rows wholesale.

        Raises:
            AuthorizationException: Caller has no associated hospital.
            ResourceNotFoundException: Associated hospital row is gone.
            ValidationException: A field is not editable.
        """
        hospital_id = profile.associated_hospital_id
        if not hospital_id:
            raise AuthorizationException(message="No hospital is associated with this account")
        async with self.uow.begin():
            try:
                found = await self.hospitals.update_hospital(hospital_id, **changes.fields)
            except ValueError as e:
                raise ValidationException(str(e)) from e
            if not found:
                raise ResourceNotFoundException("hospital", hospital_id)
            if changes.service_ids is not None:
                await self.hospitals.replace_services(hospital_id, changes.service_ids)
        await self.profile_cache.invalidate_profile(profile.id)
        logger.info("Hospital %s profile updated by %s", hospital_id, profile.id)
        return hospital_id
