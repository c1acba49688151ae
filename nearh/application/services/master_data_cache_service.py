"""Master-data cache: read-through cache of the locations, services and specialties lists.

Each list is cached whole under a versioned key ({version}:{list_type}).
Reads are bounded by a timeout; misses fetch from the database with
retry and exponential backoff, then one unretried attempt, then degrade
to an empty list. Writes are invalidate-on-write: mutations delete the
key and the next read repopulates it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from tenacity import AsyncRetrying, before_sleep_log, stop_after_attempt, wait_exponential

from nearh.application.dtos.master_data import (
    LocationResult,
    MasterItem,
    ServiceResult,
    SpecialtyResult,
    master_item_to_cache,
)
from nearh.application.interfaces.repositories import IMasterListReader
from nearh.application.interfaces.services import ICacheService
from nearh.domain.enums import MasterListType
from nearh.infrastructure.cache.keys import master_list_key
from nearh.shared.telemetry.tracing import add_span_attributes, set_span_error, traced
from nearh.shared.utils.background import FireAndForget

logger = logging.getLogger(__name__)

_ITEM_TYPES: dict[MasterListType, type] = {
    MasterListType.LOCATIONS: LocationResult,
    MasterListType.SERVICES: ServiceResult,
    MasterListType.SPECIALTIES: SpecialtyResult,
}


def _decode_items(list_type: MasterListType, raw: Any) -> list[MasterItem]:
    """Rebuild DTOs from a cached JSON list. Raises ValueError on any malformed entry."""
    if not isinstance(raw, list):
        raise ValueError(f"Expected list, got {type(raw).__name__}")
    item_type = _ITEM_TYPES[list_type]
    try:
        return [item_type(**row) for row in raw]
    except TypeError as e:
        raise ValueError(str(e)) from e


class MasterDataCacheService:
    """Read-through cache for the three master lists. All public methods are total."""

    def __init__(
        self,
        readers: Mapping[MasterListType, IMasterListReader],
        cache: ICacheService | None = None,
        background: FireAndForget | None = None,
        *,
        version: str = "v1",
        ttl: int = 86400,
        read_timeout: float = 2.0,
        retries: int = 3,
        retry_base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.readers = readers
        self.cache = cache
        self.background = background or FireAndForget()
        self.version = version
        self.ttl = ttl
        self.read_timeout = read_timeout
        self.retries = retries
        self.retry_base_delay = retry_base_delay
        self.sleep = sleep

    async def get_cached_locations(self) -> list[LocationResult]:
        """Locations ordered by city."""
        return await self.get_cached_list(MasterListType.LOCATIONS)

    async def get_cached_services(self) -> list[ServiceResult]:
        """Services ordered by service_name."""
        return await self.get_cached_list(MasterListType.SERVICES)

    async def get_cached_specialties(self) -> list[SpecialtyResult]:
        """Specialties ordered by specialty_name."""
        return await self.get_cached_list(MasterListType.SPECIALTIES)

    @traced("master_cache.get_cached_list")
    async def get_cached_list(self, list_type: MasterListType) -> list[Any]:
        """Return the complete ordered list for list_type; [] if it cannot be loaded.

        Empty database results are returned but never cached.
        """
        key = master_list_key(self.version, list_type)
        cached = await self._read_cache(key, list_type)
        if cached:
            logger.debug("[Cache] HIT - %s (%d items)", key, len(cached))
            add_span_attributes(**{"cache.key": key, "cache.hit": True})
            return cached
        add_span_attributes(**{"cache.key": key, "cache.hit": False})
        logger.debug("[Cache] MISS - %s, fetching from database", key)

        reader = self.readers.get(list_type)
        if reader is None:
            logger.error("[Cache] No reader configured for %s", list_type.value)
            return []

        try:
            items = await self._fetch_with_retry(reader)
        except Exception as e:
            logger.warning(
                "[Cache] Fetch of %s failed after %d attempts (%s); trying once more without retry",
                key,
                self.retries,
                e,
            )
            try:
                items = await reader.list_all()
            except Exception as fallback_error:
                logger.exception("[Cache] Database fallback failed for %s", key)
                set_span_error(fallback_error)
                return []

        if not items:
            logger.warning("[Cache] No data found in database for %s; not caching", key)
            return []

        self._backfill(key, items)
        return list(items)

    async def invalidate_list(self, list_type: MasterListType) -> None:
        """Delete one versioned list key. Failures are logged, never raised."""
        await self._invalidate(list_type)

    async def invalidate_locations_cache(self) -> None:
        await self.invalidate_list(MasterListType.LOCATIONS)

    async def invalidate_services_cache(self) -> None:
        await self.invalidate_list(MasterListType.SERVICES)

    async def invalidate_specialties_cache(self) -> None:
        await self.invalidate_list(MasterListType.SPECIALTIES)

    async def invalidate_all_master_caches(self) -> None:
        """Delete all three list keys concurrently; one failure does not stop the others."""
        if self.cache is None:
            return
        results = await asyncio.gather(
            *(self._invalidate(list_type) for list_type in MasterListType),
            return_exceptions=True,
        )
        failed = []
        for list_type, result in zip(MasterListType, results):
            if isinstance(result, BaseException):
                logger.error("[Cache] Invalidation of %s raised: %s", list_type.value, result)
            if result is not True:
                failed.append(list_type.value)
        if failed:
            logger.warning("[Cache] Master caches not invalidated: %s", ", ".join(failed))
        else:
            logger.info("[Cache] All master caches invalidated")

    async def _invalidate(self, list_type: MasterListType) -> bool:
        """Delete one list key, cancelling its pending backfills. True if the store confirmed."""
        if self.cache is None:
            return False
        key = master_list_key(self.version, list_type)
        self.background.cancel(key)
        try:
            deleted = await self.cache.delete(key)
        except Exception:
            logger.exception("[Cache] Failed to invalidate %s", key)
            return False
        if deleted:
            logger.info("[Cache] Invalidated %s", key)
        else:
            logger.warning("[Cache] %s not invalidated (cache unavailable)", key)
        return bool(deleted)

    async def _read_cache(self, key: str, list_type: MasterListType) -> list[MasterItem] | None:
        """Bounded cache read; the pending read is cancelled on timeout."""
        if self.cache is None or not self.cache.is_available():
            return None
        try:
            raw = await asyncio.wait_for(self.cache.get(key), timeout=self.read_timeout)
        except asyncio.TimeoutError:
            logger.warning("[Cache] Redis timeout after %ss for %s", self.read_timeout, key)
            return None
        except Exception as e:
            logger.warning("[Cache] Redis error for %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return _decode_items(list_type, raw)
        except ValueError as e:
            logger.warning("[Cache] Discarding undecodable entry %s: %s", key, e)
            return None

    async def _fetch_with_retry(self, reader: IMasterListReader) -> list[MasterItem]:
        items: list[MasterItem] = []
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=self.retry_base_delay),
            sleep=self.sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                items = await reader.list_all()
        return items

    def _backfill(self, key: str, items: list[MasterItem]) -> None:
        if self.cache is None or not self.cache.is_available():
            return
        payload = [master_item_to_cache(item) for item in items]
        self.background.spawn(
            self._write(key, payload),
            description=f"cache backfill {key}",
            key=key,
        )

    async def _write(self, key: str, payload: list[dict[str, Any]]) -> None:
        if await self.cache.set(key, payload, ttl=self.ttl):
            logger.debug("[Cache] Successfully cached %s (%d items)", key, len(payload))
        else:
            logger.warning("[Cache] Failed to cache %s", key)
