"""Master-data endpoints: public cached reads, superadmin-only writes."""

import pytest
from httpx import AsyncClient

from nearh.domain.enums import MasterListType
from nearh.infrastructure.persistence.database import get_session_factory


async def test_public_lists_are_served(client: AsyncClient, master_lists) -> None:
    locations = await client.get("/api/v1/locations")
    services = await client.get("/api/v1/services")
    specialties = await client.get("/api/v1/specialties")

    assert locations.status_code == 200
    assert [row["city"] for row in locations.json()] == ["Mumbai", "Nagpur"]
    assert services.json() == [{"id": "svc-1", "service_name": "ICU", "description": None}]
    assert specialties.json() == [{"id": "spc-1", "specialty_name": "Cardiology"}]


async def test_created_location_is_listed_next(
    client: AsyncClient, master_lists, auth_headers
) -> None:
    await client.get("/api/v1/locations")

    created = await client.post(
        "/api/v1/locations",
        json={"city": "Pune", "state": "MH"},
        headers=auth_headers("superadmin-1"),
    )
    listed = await client.get("/api/v1/locations")

    assert created.status_code == 201
    assert created.json()["city"] == "Pune"
    assert "Pune" in [row["city"] for row in listed.json()]


async def test_update_and_delete_location(client: AsyncClient, master_lists, auth_headers) -> None:
    headers = auth_headers("superadmin-1")

    updated = await client.patch("/api/v1/locations/loc-2", json={"city": "Nashik"}, headers=headers)
    deleted = await client.delete("/api/v1/locations/loc-1", headers=headers)
    missing = await client.delete("/api/v1/locations/loc-1", headers=headers)

    assert updated.status_code == 200
    assert updated.json() == {"id": "loc-2", "city": "Nashik", "state": "MH"}
    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert missing.json()["error"] == "RESOURCE_NOT_FOUND"
    assert [loc.id for loc in master_lists[MasterListType.LOCATIONS].items] == ["loc-2"]


async def test_empty_update_is_rejected(client: AsyncClient, master_lists, auth_headers) -> None:
    response = await client.patch(
        "/api/v1/specialties/spc-1", json={}, headers=auth_headers("superadmin-1")
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_writes_require_authentication(client: AsyncClient, master_lists) -> None:
    response = await client.post("/api/v1/services", json={"service_name": "Dialysis"})
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_writes_require_superadmin(client: AsyncClient, master_lists, auth_headers) -> None:
    response = await client.post(
        "/api/v1/services",
        json={"service_name": "Dialysis"},
        headers=auth_headers("admin-approved"),
    )
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"
    assert len(master_lists[MasterListType.SERVICES].items) == 1


async def test_invalid_body_is_422(client: AsyncClient, master_lists, auth_headers) -> None:
    response = await client.post(
        "/api/v1/locations", json={"city": ""}, headers=auth_headers("superadmin-1")
    )
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"]


async def test_lists_need_database_when_not_overridden(client: AsyncClient) -> None:
    if get_session_factory() is not None:
        pytest.skip("DATABASE_URL is configured")
    response = await client.get("/api/v1/locations")
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"
