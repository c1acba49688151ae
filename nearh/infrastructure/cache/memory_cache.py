"""In-process cache with TTL support.

Same contract as the Redis CacheService (JSON values, TTL in seconds) for
single-process deployments and local development. Values are stored
serialized so callers never share mutable objects with the cache.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCacheService:
    """Async in-memory cache. Entries expire lazily on read."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        logger.info("In-memory cache enabled")

    async def disconnect(self) -> None:
        async with self._lock:
            self._entries.clear()

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        """Return cached value or None if missing or expired."""
        now = time.monotonic()
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache MISS: %s", key)
                return None
            expires_at, serialized = entry
            if now >= expires_at:
                self._entries.pop(key, None)
                logger.debug("Cache EXPIRED: %s", key)
                return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(serialized)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns False if value is not JSON-serializable."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache set error for key %s: value is not JSON-serializable", key)
            return False
        async with self._lock:
            self._entries[key] = (time.monotonic() + ttl, serialized)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key. Missing keys are not an error."""
        async with self._lock:
            self._entries.pop(key, None)
        logger.debug("Cache DELETE: %s", key)
        return True
