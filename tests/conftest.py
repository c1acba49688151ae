"""Pytest configuration and fixtures for nearh.

Environment is set before nearh is imported: settings are validated on
first use and cached. HTTP tests run against create_app() with an
in-memory profile table standing in for the request gate's database
lookup; API dependencies that need the database are overridden per test.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.application.dtos.profile import CachedProfile
from nearh.core.limiter import limiter
from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.infrastructure.persistence.database import get_session_factory
from nearh.infrastructure.security.jwt import create_access_token
from nearh.main import create_app

SUPERADMIN_ID = "superadmin-1"
APPROVED_ADMIN_ID = "admin-approved"
PENDING_ADMIN_ID = "admin-pending"


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Rate-limit counters are process-wide; start every test from zero."""
    limiter.reset()
    yield


@pytest.fixture
def profiles() -> dict[str, CachedProfile]:
    """Authorization profiles seen by the request gate, keyed by identity."""
    return {
        SUPERADMIN_ID: CachedProfile(
            id=SUPERADMIN_ID, role=UserRole.SUPERADMIN, status=ApprovalStatus.APPROVED
        ),
        APPROVED_ADMIN_ID: CachedProfile(
            id=APPROVED_ADMIN_ID,
            role=UserRole.ADMIN,
            status=ApprovalStatus.APPROVED,
            associated_hospital_id="hosp-1",
        ),
        PENDING_ADMIN_ID: CachedProfile(
            id=PENDING_ADMIN_ID,
            role=UserRole.ADMIN,
            status=ApprovalStatus.PENDING,
            associated_hospital_id="hosp-2",
        ),
    }


@pytest.fixture
def app(profiles: dict[str, CachedProfile]) -> FastAPI:
    """Fresh application whose request gate reads profiles from the fixture."""

    async def lookup(scope: dict, identity: str) -> CachedProfile | None:
        return profiles.get(identity)

    application = create_app(profile_lookup=lookup)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Redirects are not followed."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Build Authorization headers carrying a freshly signed token for an identity."""

    def _headers(identity: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(identity)}"}

    return _headers


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after test.

    Requires DATABASE_URL (PostgreSQL, migrated with `alembic upgrade head`).
    Skips when it is not set; run without a database via: pytest -m 'not requires_db'.
    """
    factory = get_session_factory()
    if factory is None:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with factory() as session:
        yield session
        await session.rollback()
