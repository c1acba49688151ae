"""DB session dependencies (composition root)."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from nearh.domain.exceptions import SqlNotConfiguredException
from nearh.infrastructure.persistence.database import get_db, get_session_factory

logger = logging.getLogger(__name__)


async def get_auth_db() -> AsyncIterator[AsyncSession]:
    """Separate session for authorization lookups.

    Keeps the request's get_db session free of an implicit read transaction
    so write services can open their own with session.begin().
    """
    factory = get_session_factory()
    if factory is None:
        raise SqlNotConfiguredException()
    async with factory() as session:
        yield session


__all__ = ["get_auth_db", "get_db"]
