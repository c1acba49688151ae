"""Cache backend selection from settings."""

from __future__ import annotations

from nearh.core.config import Settings
from nearh.infrastructure.cache.memory_cache import InMemoryCacheService
from nearh.infrastructure.cache.redis_cache import CacheService


def create_cache_service(settings: Settings) -> CacheService | InMemoryCacheService | None:
    """Return an unconnected cache service for settings.cache_backend, or None when disabled."""
    if settings.cache_backend == "redis":
        return CacheService()
    if settings.cache_backend == "memory":
        return InMemoryCacheService()
    return None
