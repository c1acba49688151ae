"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready."""

    status: str = Field(default="ok", description="Readiness status")
    cache_backend: str = Field(..., description="Configured cache backend (redis, memory, none)")
    cache_available: bool = Field(..., description="Whether the cache store is reachable")
    database_configured: bool = Field(..., description="Whether DATABASE_URL is set")
    pending_background_tasks: int = Field(default=0, description="Cache backfills still running")
