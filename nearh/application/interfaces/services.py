"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol


class ICacheService(Protocol):
    """Key-value cache store used by the read-through caches.

    Implementations return None / False on backend errors; callers still
    guard every call because a custom backend may raise.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""


class IUnitOfWork(Protocol):
    """Transaction boundary for write services (satisfied by AsyncSession).

    `async with uow.begin():` commits on normal exit and rolls back when the
    block raises.
    """

    def begin(self) -> AbstractAsyncContextManager[Any]:
        """Start a transaction."""


class IProfileInvalidator(Protocol):
    """Profile cache invalidation used by services that change role/status/hospital."""

    async def invalidate_profile(self, identity: str) -> None:
        """Delete the cached profile. Never raises."""


class IMasterListInvalidator(Protocol):
    """Master-data cache invalidation used by master-data CRUD."""

    async def invalidate_all_master_caches(self) -> None:
        """Delete all cached lists. Never raises."""
