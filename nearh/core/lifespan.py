"""Application lifespan: startup and shutdown.

Wires infrastructure only: cache backend, background task set, telemetry,
SQL engine dispose. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from nearh.core.config import get_settings
from nearh.infrastructure.cache.factory import create_cache_service
from nearh.infrastructure.persistence import database
from nearh.shared.telemetry.telemetry import instrument, setup_tracing, shutdown_tracing
from nearh.shared.utils.background import FireAndForget

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: background task set, cache (if configured), telemetry (if
    enabled). Shutdown order: drain pending cache backfills, cache disconnect,
    telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.background = FireAndForget()

    cache = create_cache_service(settings)
    if cache is not None:
        await cache.connect()
        if not cache.is_available():
            logger.warning("Cache backend %r unavailable; reads go to the database", settings.cache_backend)
    app.state.cache = cache

    provider = setup_tracing(settings)
    if provider is not None:
        instrument(
            app,
            provider,
            engine=database.engine if database.get_session_factory() is not None else None,
            redis_enabled=settings.cache_backend == "redis",
        )

    yield

    # ---- Shutdown ----
    await app.state.background.drain(timeout=settings.background_drain_timeout_seconds)

    if app.state.cache is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    shutdown_tracing()

    await database.dispose_engine()
