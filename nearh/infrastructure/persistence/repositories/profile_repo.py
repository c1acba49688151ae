"""Profile repository. Returns CachedProfile DTOs (authorization fields only)."""

from __future__ import annotations

from sqlalchemy import Row, select
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.application.dtos.profile import CachedProfile
from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.infrastructure.persistence.models.profile import Profile
from nearh.infrastructure.persistence.repositories.base import BaseRepository


def _to_cached(p: Profile | Row) -> CachedProfile:
    """Authorization fields of a Profile model or of a row selecting the same columns."""
    return CachedProfile(
        id=p.id,
        role=UserRole(p.role),
        status=ApprovalStatus(p.status),
        associated_hospital_id=p.associated_hospital_id,
    )


class ProfileRepository(BaseRepository[Profile]):
    """Profiles table. Source of truth behind the authorization profile cache."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Profile)

    async def get_authorization_profile(self, profile_id: str) -> CachedProfile | None:
        result = await self.db.execute(
            select(
                Profile.id,
                Profile.role,
                Profile.status,
                Profile.associated_hospital_id,
            ).where(Profile.id == profile_id)
        )
        row = result.one_or_none()
        return None if row is None else _to_cached(row)

    async def create_profile(
        self,
        profile_id: str,
        full_name: str | None,
        role: UserRole,
        status: ApprovalStatus,
        associated_hospital_id: str | None,
    ) -> CachedProfile:
        profile = await self.add(
            Profile(
                id=profile_id,
                full_name=full_name,
                role=role,
                status=status,
                associated_hospital_id=associated_hospital_id,
            )
        )
        return _to_cached(profile)

    async def update_profile(
        self,
        profile_id: str,
        *,
        role: UserRole | None = None,
        status: ApprovalStatus | None = None,
    ) -> CachedProfile | None:
        profile = await self.get_by_id(profile_id)
        if profile is None:
            return None
        changes: dict[str, object] = {}
        if role is not None:
            changes["role"] = role
        if status is not None:
            changes["status"] = status
        if changes:
            await self.apply(profile, changes)
        return _to_cached(profile)

    async def delete_profile(self, profile_id: str) -> bool:
        return await self.delete_by_id(profile_id)
