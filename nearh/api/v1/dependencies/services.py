"""Application service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.api.v1.dependencies.cache import (
    get_master_data_cache_service,
    get_profile_invalidator,
)
from nearh.api.v1.dependencies.db import get_db
from nearh.application.services import (
    ApprovalService,
    AuthService,
    HospitalProfileService,
    MasterDataCacheService,
    MasterDataService,
    ProfileCacheService,
)
from nearh.infrastructure.persistence.repositories import (
    HospitalRepository,
    ProfileRepository,
    UserAccountRepository,
    master_repositories,
)
from nearh.infrastructure.security.jwt import create_access_token


async def get_auth_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    profile_cache: Annotated[ProfileCacheService, Depends(get_profile_invalidator)],
) -> AuthService:
    return AuthService(
        db,
        accounts=UserAccountRepository(db),
        hospitals=HospitalRepository(db),
        profiles=ProfileRepository(db),
        profile_cache=profile_cache,
        issue_token=create_access_token,
    )


async def get_approval_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    profile_cache: Annotated[ProfileCacheService, Depends(get_profile_invalidator)],
) -> ApprovalService:
    return ApprovalService(
        db,
        profiles=ProfileRepository(db),
        hospitals=HospitalRepository(db),
        accounts=UserAccountRepository(db),
        profile_cache=profile_cache,
    )


async def get_hospital_profile_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    profile_cache: Annotated[ProfileCacheService, Depends(get_profile_invalidator)],
) -> HospitalProfileService:
    return HospitalProfileService(db, hospitals=HospitalRepository(db), profile_cache=profile_cache)


async def get_master_data_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    master_cache: Annotated[MasterDataCacheService, Depends(get_master_data_cache_service)],
) -> MasterDataService:
    return MasterDataService(db, master_repositories(db), master_cache)
