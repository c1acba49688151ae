"""Signup and login for hospital admins.

Signup writes the account, the (unverified) hospital and the pending admin
profile in one transaction, so the half-provisioned admin state is never
committed. Both flows delete the identity's cached profile before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from nearh.application.dtos.auth import AuthResult, SignupData
from nearh.application.interfaces.repositories import (
    IHospitalRepository,
    IProfileRepository,
    IUserAccountRepository,
)
from nearh.application.interfaces.services import IProfileInvalidator, IUnitOfWork
from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.domain.exceptions import AuthenticationException

logger = logging.getLogger(__name__)


class AuthService:
    """Identity provisioning and credential checks."""

    def __init__(
        self,
        uow: IUnitOfWork,
        accounts: IUserAccountRepository,
        hospitals: IHospitalRepository,
        profiles: IProfileRepository,
        profile_cache: IProfileInvalidator,
        issue_token: Callable[[str], str],
    ) -> None:
        self.uow = uow
        self.accounts = accounts
        self.hospitals = hospitals
        self.profiles = profiles
        self.profile_cache = profile_cache
        self.issue_token = issue_token

    async def signup(self, data: SignupData) -> AuthResult:
        """Register an admin and their hospital; the profile starts pending.

        Raises:
            DuplicateResourceException: If the email is already registered.
        """
        async with self.uow.begin():
            user_id = await self.accounts.create_account(data.email, data.password)
            hospital_id = await self.hospitals.create_hospital(
                name=data.hospital_name,
                official_email=data.official_email,
                official_phone=data.official_phone,
                location_id=data.location_id,
                has_ayushman_bharat=data.has_ayushman_bharat,
                emergency_contact=data.emergency_contact,
            )
            await self.profiles.create_profile(
                user_id,
                full_name=data.full_name,
                role=UserRole.ADMIN,
                status=ApprovalStatus.PENDING,
                associated_hospital_id=hospital_id,
            )
        await self.profile_cache.invalidate_profile(user_id)
        logger.info("Admin %s signed up for hospital %s (pending approval)", user_id, hospital_id)
        return AuthResult(user_id=user_id, access_token=self.issue_token(user_id))

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token.

        Raises:
            AuthenticationException: If email or password is wrong.
        """
        user_id = await self.accounts.authenticate(email, password)
        if user_id is None:
            raise AuthenticationException("Invalid email or password")
        await self.profile_cache.invalidate_profile(user_id)
        logger.info("User %s logged in", user_id)
        return AuthResult(user_id=user_id, access_token=self.issue_token(user_id))

    async def logout(self, user_id: str) -> None:
        """Drop the cached profile so the next sign-in starts from the database."""
        await self.profile_cache.invalidate_profile(user_id)
