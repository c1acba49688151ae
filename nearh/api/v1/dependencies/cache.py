"""Cache dependencies: process-wide cache store and background task set, per-request cache services."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.api.v1.dependencies.db import get_auth_db, get_db
from nearh.application.interfaces.services import ICacheService
from nearh.application.services.master_data_cache_service import MasterDataCacheService
from nearh.application.services.profile_cache_service import ProfileCacheService
from nearh.core.config import get_settings
from nearh.infrastructure.persistence.repositories import ProfileRepository, master_repositories
from nearh.shared.utils.background import FireAndForget


def get_cache(request: Request) -> ICacheService | None:
    """Cache store created in the lifespan (None when CACHE_BACKEND=none)."""
    return getattr(request.app.state, "cache", None)


def get_background(request: Request) -> FireAndForget:
    """Background task set created in the lifespan; created lazily when the lifespan did not run."""
    background = getattr(request.app.state, "background", None)
    if background is None:
        background = FireAndForget()
        request.app.state.background = background
    return background


def _profile_cache(
    db: AsyncSession,
    cache: ICacheService | None,
    background: FireAndForget,
) -> ProfileCacheService:
    settings = get_settings()
    return ProfileCacheService(
        ProfileRepository(db),
        cache=cache,
        background=background,
        ttl=settings.cache_ttl_profile,
        read_timeout=settings.profile_cache_timeout_seconds,
    )


async def get_profile_cache_service(
    db: Annotated[AsyncSession, Depends(get_auth_db)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
    background: Annotated[FireAndForget, Depends(get_background)],
) -> ProfileCacheService:
    """Profile cache for authorization checks (own session)."""
    return _profile_cache(db, cache, background)


async def get_profile_invalidator(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
    background: Annotated[FireAndForget, Depends(get_background)],
) -> ProfileCacheService:
    """Profile cache bound to the write session; write services only call invalidate_profile."""
    return _profile_cache(db, cache, background)


async def get_master_data_cache_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
    background: Annotated[FireAndForget, Depends(get_background)],
) -> MasterDataCacheService:
    settings = get_settings()
    return MasterDataCacheService(
        master_repositories(db),
        cache=cache,
        background=background,
        version=settings.cache_version,
        ttl=settings.cache_ttl_master,
        read_timeout=settings.master_cache_timeout_seconds,
        retries=settings.master_fetch_retries,
        retry_base_delay=settings.master_fetch_retry_base_delay,
    )
