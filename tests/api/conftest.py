"""API test fixtures: database-backed dependencies replaced with in-memory versions."""

from contextlib import asynccontextmanager
from typing import Any

import pytest
from fastapi import FastAPI

from nearh.api.v1.dependencies import (
    get_master_data_cache_service,
    get_master_data_service,
    get_profile_cache_service,
)
from nearh.application.dtos.master_data import LocationResult, ServiceResult, SpecialtyResult
from nearh.application.dtos.profile import CachedProfile
from nearh.application.services import MasterDataCacheService, MasterDataService
from nearh.domain.enums import MasterListType
from nearh.infrastructure.cache.memory_cache import InMemoryCacheService
from nearh.shared.utils.background import FireAndForget


class StaticProfileCache:
    """Profile cache over a plain dict; stands in for the database-backed one."""

    def __init__(self, profiles: dict[str, CachedProfile]) -> None:
        self.profiles = profiles
        self.invalidated: list[str] = []

    async def get_authorized_profile(self, identity: str) -> CachedProfile | None:
        return self.profiles.get(identity)

    async def invalidate_profile(self, identity: str) -> None:
        self.invalidated.append(identity)


class ListRepository:
    def __init__(self, list_type: MasterListType, item_type: type, items: list) -> None:
        self.list_type = list_type
        self.item_type = item_type
        self.items = items
        self.calls = 0

    async def list_all(self) -> list:
        self.calls += 1
        return list(self.items)

    async def create_item(self, **fields: Any):
        item = self.item_type(id=f"{self.list_type.value}-{len(self.items) + 1}", **fields)
        self.items.append(item)
        return item

    async def update_item(self, item_id: str, **fields: Any):
        for index, item in enumerate(self.items):
            if item.id == item_id:
                self.items[index] = self.item_type(**{**item.__dict__, **fields})
                return self.items[index]
        return None

    async def delete_item(self, item_id: str) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.id != item_id]
        return len(self.items) < before


class NoopUnitOfWork:
    @asynccontextmanager
    async def begin(self):
        yield self


@pytest.fixture(autouse=True)
def profile_cache(app: FastAPI, profiles: dict[str, CachedProfile]) -> StaticProfileCache:
    """API authorization dependencies read the same profiles as the request gate."""
    static = StaticProfileCache(profiles)
    app.dependency_overrides[get_profile_cache_service] = lambda: static
    return static


@pytest.fixture
async def master_lists(app: FastAPI) -> dict[MasterListType, ListRepository]:
    """Master lists served through a real MasterDataCacheService over the in-memory cache."""
    repositories = {
        MasterListType.LOCATIONS: ListRepository(
            MasterListType.LOCATIONS,
            LocationResult,
            [
                LocationResult(id="loc-1", city="Mumbai", state="MH"),
                LocationResult(id="loc-2", city="Nagpur", state="MH"),
            ],
        ),
        MasterListType.SERVICES: ListRepository(
            MasterListType.SERVICES,
            ServiceResult,
            [ServiceResult(id="svc-1", service_name="ICU")],
        ),
        MasterListType.SPECIALTIES: ListRepository(
            MasterListType.SPECIALTIES,
            SpecialtyResult,
            [SpecialtyResult(id="spc-1", specialty_name="Cardiology")],
        ),
    }
    background = FireAndForget()
    master_cache = MasterDataCacheService(
        repositories, cache=InMemoryCacheService(), background=background, retry_base_delay=0
    )
    app.dependency_overrides[get_master_data_cache_service] = lambda: master_cache
    app.dependency_overrides[get_master_data_service] = lambda: MasterDataService(
        NoopUnitOfWork(), repositories, master_cache
    )
    yield repositories
    await background.drain(timeout=1)
