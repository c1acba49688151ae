"""Cache: Redis and in-memory cache services and cache key utilities.

Used by the profile and master-data read-through caches. Key format is
in keys.py; backend selection in create_cache_service().
"""

from nearh.infrastructure.cache.factory import create_cache_service
from nearh.infrastructure.cache.keys import master_list_key, profile_key
from nearh.infrastructure.cache.memory_cache import InMemoryCacheService
from nearh.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "InMemoryCacheService",
    "create_cache_service",
    "master_list_key",
    "profile_key",
]
