"""Redis-backed cache store for authorization profiles and master-data lists.

Values are JSON documents written with SETEX. A command that loses the
connection is retried once; the connection pool re-dials on its own. When
the retry fails too the store is marked down and skipped until a cooldown
passes, then the next command tries it again. Any other backend failure
is logged and reported as a miss (get) or False (set/delete), so the
read-through caches above never see a Redis exception.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from nearh.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOT_RUN = object()


class CacheService:
    """Async Redis cache store. Call connect() at startup and disconnect() at shutdown."""

    def __init__(
        self, redis_client: redis.Redis | None = None, *, retry_cooldown: float = 5.0
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Pre-built client (tests, DI); connect() is then a no-op.
            retry_cooldown: Seconds a store marked down is skipped before the next attempt.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self.retry_cooldown = retry_cooldown
        self._connected = redis_client is not None
        self._down_since: float | None = None

    def _new_client(self) -> redis.Redis:
        password = self.settings.redis_password
        return redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        """Create the client and ping it. On failure the store is marked down, not dropped."""
        if self.redis is not None:
            return
        self.redis = self._new_client()
        try:
            await self.redis.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis connection failed: %s. Cache disabled; retrying every %ss.",
                e,
                self.retry_cooldown,
            )
            self._mark_down()
            return
        self._mark_up()
        logger.info("Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port)

    async def disconnect(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            logger.info("Redis cache disconnected")
        self.redis = None
        self._connected = False
        self._down_since = None

    def is_available(self) -> bool:
        """True when connected, or when a store marked down is due for another attempt."""
        if self.redis is None:
            return False
        if self._connected:
            return True
        return self._down_since is None or time.monotonic() - self._down_since >= self.retry_cooldown

    def _mark_down(self) -> None:
        self._connected = False
        self._down_since = time.monotonic()

    def _mark_up(self) -> None:
        if self._down_since is not None:
            logger.info("Redis cache reachable again")
        self._connected = True
        self._down_since = None

    async def _run(self, op: str, key: str, command: Callable[[redis.Redis], Awaitable[T]]) -> Any:
        """Run command against the client, retrying once after a dropped connection.

        Returns _NOT_RUN when the store is unavailable or the command failed.
        Cancellation (a caller's read timeout) leaves the connection state as it was.
        """
        if not self.is_available():
            return _NOT_RUN
        client = self.redis
        attempts = 2 if self._connected else 1
        for attempt in range(1, attempts + 1):
            try:
                result = await command(client)
            except (redis.ConnectionError, redis.TimeoutError) as e:
                if attempt < attempts:
                    logger.warning("Redis %s for %s lost the connection (%s); retrying", op, key, e)
                    continue
                logger.warning("Redis %s failed for %s (%s); cache marked down", op, key, e)
                self._mark_down()
                return _NOT_RUN
            except redis.RedisError:
                logger.exception("Redis %s failed for %s", op, key)
                return _NOT_RUN
            self._mark_up()
            return result
        return _NOT_RUN

    async def get(self, key: str) -> Any | None:
        """Return the JSON-decoded value, or None on miss, bad JSON or backend failure."""
        raw = await self._run("GET", key, lambda client: client.get(key))
        if raw is _NOT_RUN or raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Cache value for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value as JSON for ttl seconds. Returns True if Redis accepted it."""
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache set error for key %s: value is not JSON-serializable", key)
            return False
        result = await self._run("SETEX", key, lambda client: client.setex(key, ttl, payload))
        if result is _NOT_RUN:
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Delete key. Deleting a missing key succeeds; False only when Redis could not be reached."""
        result = await self._run("DEL", key, lambda client: client.delete(key))
        if result is _NOT_RUN:
            return False
        logger.debug("Cache DELETE: %s", key)
        return True
