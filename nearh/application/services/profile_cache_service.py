"""Authorization profile cache: read-through cache of per-identity role/status/hospital.

Consulted on nearly every request (request gate and API authorization
dependencies), so the cache read is bounded by a short timeout and the
backfill write is fire-and-forget. The relational store stays the source
of truth: every failure of the cache degrades to a direct read.
"""

from __future__ import annotations

import asyncio
import logging

from nearh.application.dtos.profile import CachedProfile
from nearh.application.interfaces.repositories import IProfileReader
from nearh.application.interfaces.services import ICacheService
from nearh.infrastructure.cache.keys import profile_key
from nearh.shared.telemetry.tracing import add_span_attributes, traced
from nearh.shared.utils.background import FireAndForget

logger = logging.getLogger(__name__)


class ProfileCacheService:
    """get_authorized_profile / invalidate_profile over a cache store and a profile reader.

    Both public methods are total: they never raise because of the cache or
    the store. Construct one per request (the reader is session-bound); the
    cache and the background task set are process-wide.
    """

    def __init__(
        self,
        profile_reader: IProfileReader,
        cache: ICacheService | None = None,
        background: FireAndForget | None = None,
        *,
        ttl: int = 3600,
        read_timeout: float = 0.5,
    ) -> None:
        self.profile_reader = profile_reader
        self.cache = cache
        self.background = background or FireAndForget()
        self.ttl = ttl
        self.read_timeout = read_timeout

    @traced("profile_cache.get_authorized_profile")
    async def get_authorized_profile(self, identity: str) -> CachedProfile | None:
        """Return the authorization profile for a verified identity, or None.

        Cache hit returns immediately unless it is an admin without a hospital
        (stale half-provisioned entry), which is re-read from the store. A row
        read from the store is backfilled into the cache in the background,
        except for half-provisioned admins. Missing rows are not cached.
        """
        try:
            key = profile_key(identity)
        except ValueError:
            logger.warning("Rejected malformed identity for profile lookup")
            return None

        cached = await self._read_cache(key)
        if cached is not None:
            if not cached.is_incompletely_provisioned:
                add_span_attributes(**{"cache.key": key, "cache.hit": True})
                return cached
            logger.warning(
                "Cached admin %s has no hospital; discarding entry and reading from database",
                identity,
            )
        add_span_attributes(**{"cache.key": key, "cache.hit": False})

        try:
            profile = await self.profile_reader.get_authorization_profile(identity)
        except Exception:
            logger.exception("Profile lookup failed for %s", identity)
            return None
        if profile is None:
            logger.debug("No profile row for %s", identity)
            return None

        if profile.is_incompletely_provisioned:
            logger.info("Admin %s has no hospital yet; returning without caching", identity)
            return profile

        self._backfill(key, profile)
        return profile

    async def invalidate_profile(self, identity: str) -> None:
        """Delete the cached profile for identity. Failures are logged, never raised."""
        if self.cache is None:
            return
        try:
            key = profile_key(identity)
        except ValueError:
            logger.warning("Rejected malformed identity for profile invalidation")
            return
        self.background.cancel(key)
        try:
            deleted = await self.cache.delete(key)
        except Exception:
            logger.exception("Failed to invalidate profile cache %s", key)
            return
        if deleted:
            logger.debug("Invalidated profile cache %s", key)
        else:
            logger.warning("Profile cache %s not invalidated (cache unavailable)", key)

    async def _read_cache(self, key: str) -> CachedProfile | None:
        """Bounded cache read. Timeout, backend error or bad payload are a miss."""
        if self.cache is None or not self.cache.is_available():
            return None
        try:
            raw = await asyncio.wait_for(self.cache.get(key), timeout=self.read_timeout)
        except asyncio.TimeoutError:
            logger.warning("Profile cache read timed out after %ss: %s", self.read_timeout, key)
            return None
        except Exception as e:
            logger.warning("Profile cache read failed for %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return CachedProfile.from_cache(raw)
        except ValueError as e:
            logger.warning("Discarding undecodable profile cache entry %s: %s", key, e)
            return None

    def _backfill(self, key: str, profile: CachedProfile) -> None:
        if self.cache is None or not self.cache.is_available():
            return
        self.background.spawn(
            self._write(key, profile),
            description=f"cache backfill {key}",
            key=key,
        )

    async def _write(self, key: str, profile: CachedProfile) -> None:
        if await self.cache.set(key, profile.to_cache(), ttl=self.ttl):
            logger.debug("Profile cache backfilled: %s", key)
        else:
            logger.warning("Profile cache backfill failed: %s", key)
