"""Health endpoints and request gate redirects for the web pages."""

import pytest
from httpx import AsyncClient

from nearh.infrastructure.security.jwt import create_access_token


async def test_health_returns_ok(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_readiness_reports_cache_wiring(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["cache_backend"] == "memory"
    assert data["pending_background_tasks"] == 0
    assert isinstance(data["database_configured"], bool)


async def test_request_id_is_generated_and_forwarded(client: AsyncClient) -> None:
    generated = await client.get("/api/v1/health")
    forwarded = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-abc_123"})
    rejected = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id!"})

    assert generated.headers["x-request-id"]
    assert forwarded.headers["x-request-id"] == "trace-abc_123"
    assert rejected.headers["x-request-id"] != "bad id!"


@pytest.mark.parametrize("path", ["/admin", "/superadmin", "/shared"])
async def test_anonymous_is_sent_to_login(client: AsyncClient, path: str) -> None:
    response = await client.get(path)
    assert response.status_code == 307
    assert response.headers["location"] == "/auth/login"


async def test_public_pages_render_for_anonymous(client: AsyncClient) -> None:
    for path in ("/", "/auth/login"):
        response = await client.get(path)
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]


async def test_pending_admin_is_held_in_waiting_room(client: AsyncClient) -> None:
    cookie = {"cookie": f"access_token={create_access_token('admin-pending')}"}

    redirected = await client.get("/admin", headers=cookie)
    waiting = await client.get("/auth/waiting-room", headers=cookie)

    assert redirected.status_code == 307
    assert redirected.headers["location"] == "/auth/waiting-room"
    assert waiting.status_code == 200


async def test_pending_admin_still_reaches_api(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/health", headers=auth_headers("admin-pending"))
    assert response.status_code == 200


async def test_approved_admin_reaches_dashboard(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/admin", headers=auth_headers("admin-approved"))
    assert response.status_code == 200
    assert "Hospital dashboard" in response.text


async def test_admin_cannot_open_superadmin_pages(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/superadmin", headers=auth_headers("admin-approved"))
    assert response.status_code == 307
    assert response.headers["location"] == "/"


async def test_signed_in_users_leave_auth_pages(client: AsyncClient, auth_headers) -> None:
    superadmin = await client.get("/auth/login", headers=auth_headers("superadmin-1"))
    admin = await client.get("/auth/waiting-room", headers=auth_headers("admin-approved"))

    assert superadmin.headers["location"] == "/superadmin"
    assert admin.headers["location"] == "/admin"


async def test_shared_pages_allow_admins_and_superadmins(client: AsyncClient, auth_headers) -> None:
    assert (await client.get("/shared", headers=auth_headers("admin-approved"))).status_code == 200
    assert (await client.get("/shared", headers=auth_headers("superadmin-1"))).status_code == 200


async def test_identity_without_profile_is_sent_home(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/admin", headers=auth_headers("stranger"))
    assert response.status_code == 307
    assert response.headers["location"] == "/"
