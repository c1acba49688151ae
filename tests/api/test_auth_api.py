"""Auth, approvals and hospital-profile endpoints with in-memory services."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from nearh.api.v1.dependencies import get_auth_service, get_hospital_profile_service
from nearh.application.services import AuthService, HospitalProfileService
from nearh.infrastructure.security.jwt import create_access_token, identity_from_token


class _UnitOfWork:
    def begin(self):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def accounts() -> AsyncMock:
    repo = AsyncMock()
    repo.create_account = AsyncMock(return_value="admin-new")
    repo.authenticate = AsyncMock(return_value="admin-approved")
    return repo


@pytest.fixture
def hospitals() -> AsyncMock:
    repo = AsyncMock()
    repo.create_hospital = AsyncMock(return_value="hosp-new")
    repo.update_hospital = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def auth_service(app, accounts, hospitals, profile_cache) -> AuthService:
    service = AuthService(
        _UnitOfWork(),
        accounts=accounts,
        hospitals=hospitals,
        profiles=AsyncMock(),
        profile_cache=profile_cache,
        issue_token=create_access_token,
    )
    app.dependency_overrides[get_auth_service] = lambda: service
    return service


async def test_login_returns_token_and_sets_cookie(
    client: AsyncClient, auth_service, profile_cache
) -> None:
    response = await client.post(
        "/api/v1/auth/login", json={"email": "admin@city-hospital.in", "password": "pw"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "admin-approved"
    assert data["token_type"] == "bearer"
    assert identity_from_token(data["access_token"]) == "admin-approved"
    assert "access_token=" in response.headers["set-cookie"]
    assert "httponly" in response.headers["set-cookie"].lower()
    assert profile_cache.invalidated == ["admin-approved"]


async def test_login_with_bad_credentials_is_401(
    client: AsyncClient, auth_service, accounts
) -> None:
    accounts.authenticate.return_value = None

    response = await client.post(
        "/api/v1/auth/login", json={"email": "admin@city-hospital.in", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


async def test_login_validation_error_is_422(client: AsyncClient, auth_service) -> None:
    response = await client.post("/api/v1/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_signup_creates_pending_admin(
    client: AsyncClient, auth_service, hospitals, profile_cache
) -> None:
    response = await client.post(
        "/api/v1/auth/signup",
        json={
            "email": "new@city-hospital.in",
            "password": "long-enough-password",
            "full_name": "Ravi Kumar",
            "hospital_name": "City Hospital",
            "official_email": "desk@city-hospital.in",
            "official_phone": "+91-22-5550101",
        },
    )

    assert response.status_code == 201
    assert response.json()["user_id"] == "admin-new"
    hospitals.create_hospital.assert_awaited_once()
    assert profile_cache.invalidated == ["admin-new"]


async def test_logout_clears_cookie_and_invalidates(
    client: AsyncClient, auth_service, profile_cache, auth_headers
) -> None:
    response = await client.post("/api/v1/auth/logout", headers=auth_headers("admin-approved"))

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out"}
    assert profile_cache.invalidated == ["admin-approved"]


async def test_me_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401


async def test_me_returns_profile(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/auth/me", headers=auth_headers("admin-pending"))

    assert response.status_code == 200
    assert response.json() == {
        "id": "admin-pending",
        "role": "admin",
        "status": "pending",
        "associated_hospital_id": "hosp-2",
    }


async def test_me_reads_token_from_cookie(client: AsyncClient, auth_headers) -> None:
    token = auth_headers("superadmin-1")["Authorization"].removeprefix("Bearer ")
    response = await client.get("/api/v1/auth/me", headers={"cookie": f"access_token={token}"})
    assert response.status_code == 200
    assert response.json()["role"] == "superadmin"


async def test_identity_without_profile_is_403(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/auth/me", headers=auth_headers("stranger"))
    assert response.status_code == 403


@pytest.mark.parametrize("identity", ["admin-approved", "admin-pending"])
async def test_approvals_require_superadmin(
    client: AsyncClient, auth_headers, identity: str
) -> None:
    response = await client.post(
        "/api/v1/approvals/admin-pending/approve", headers=auth_headers(identity)
    )
    assert response.status_code == 403


async def test_hospital_profile_requires_approved_admin(client: AsyncClient, auth_headers) -> None:
    response = await client.patch(
        "/api/v1/hospital-profile", json={"name": "X"}, headers=auth_headers("admin-pending")
    )
    assert response.status_code == 403


async def test_hospital_profile_update(
    client: AsyncClient, app, hospitals, profile_cache, auth_headers
) -> None:
    service = HospitalProfileService(_UnitOfWork(), hospitals=hospitals, profile_cache=profile_cache)
    app.dependency_overrides[get_hospital_profile_service] = lambda: service

    response = await client.patch(
        "/api/v1/hospital-profile",
        json={"name": "City Hospital North", "service_ids": ["svc-1", "svc-2"]},
        headers=auth_headers("admin-approved"),
    )

    assert response.status_code == 200
    assert response.json()["hospital_id"] == "hosp-1"
    hospitals.update_hospital.assert_awaited_once_with("hosp-1", name="City Hospital North")
    hospitals.replace_services.assert_awaited_once_with("hosp-1", ["svc-1", "svc-2"])
    assert profile_cache.invalidated == ["admin-approved"]
