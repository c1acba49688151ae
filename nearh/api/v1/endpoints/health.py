"""Health check endpoints: liveness and readiness (cache and database wiring)."""

from fastapi import APIRouter, Request

from nearh.core.config import get_settings
from nearh.infrastructure.persistence.database import get_session_factory
from nearh.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Report cache availability and database configuration.

    Always 200: the cache is an optimization and its absence degrades reads
    to the database rather than making the service unready.
    """
    settings = get_settings()
    cache = getattr(request.app.state, "cache", None)
    background = getattr(request.app.state, "background", None)
    return ReadinessResponse(
        cache_backend=settings.cache_backend,
        cache_available=bool(cache is not None and cache.is_available()),
        database_configured=get_session_factory() is not None,
        pending_background_tasks=background.pending if background is not None else 0,
    )
