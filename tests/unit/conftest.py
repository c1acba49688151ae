"""In-memory fakes for the cache store, readers, repositories and unit of work.

The fakes count calls so tests can assert how often the cache and the
database were consulted.
"""

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any

import pytest

from nearh.application.dtos.master_data import LocationResult, ServiceResult, SpecialtyResult
from nearh.application.dtos.profile import CachedProfile
from nearh.domain.enums import MasterListType
from nearh.domain.exceptions import MasterDataFetchError
from nearh.shared.utils.background import FireAndForget


class FakeCache:
    """Cache store double. Values are JSON round-tripped like the real backends."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.available = True
        self.hang_on_get = False
        self.fail_get = False
        self.fail_delete = False
        self.get_calls = 0
        self.set_calls = 0
        self.delete_calls: list[str] = []

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any:
        self.get_calls += 1
        if self.hang_on_get:
            await asyncio.Event().wait()
        if self.fail_get:
            raise ConnectionError("cache down")
        raw = self.data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.set_calls += 1
        self.data[key] = json.dumps(value)
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        self.delete_calls.append(key)
        if self.fail_delete:
            raise ConnectionError("cache down")
        self.data.pop(key, None)
        return True

    def put(self, key: str, value: Any) -> None:
        """Seed an entry without counting a write."""
        self.data[key] = json.dumps(value)


class FakeProfileReader:
    def __init__(self) -> None:
        self.rows: dict[str, CachedProfile] = {}
        self.calls = 0
        self.fail = False

    async def get_authorization_profile(self, profile_id: str) -> CachedProfile | None:
        self.calls += 1
        if self.fail:
            raise RuntimeError("database unavailable")
        return self.rows.get(profile_id)


class FakeMasterReader:
    """One master list. The first `failures` calls raise MasterDataFetchError."""

    def __init__(self, list_type: MasterListType, items: list | None = None) -> None:
        self.list_type = list_type
        self.items = list(items or [])
        self.failures = 0
        self.calls = 0

    async def list_all(self) -> list:
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise MasterDataFetchError(self.list_type.value)
        return list(self.items)


class FakeMasterRepository(FakeMasterReader):
    """Master list with create/update/delete over plain dicts."""

    def __init__(self, list_type: MasterListType, item_type: type, items: list | None = None) -> None:
        super().__init__(list_type, items)
        self.item_type = item_type
        self._next_id = 1

    async def create_item(self, **fields: Any):
        item = self.item_type(id=f"{self.list_type.value}-new-{self._next_id}", **fields)
        self._next_id += 1
        self.items.append(item)
        return item

    async def update_item(self, item_id: str, **fields: Any):
        for index, item in enumerate(self.items):
            if item.id == item_id:
                updated = self.item_type(**{**item.__dict__, **fields})
                self.items[index] = updated
                return updated
        return None

    async def delete_item(self, item_id: str) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.id != item_id]
        return len(self.items) < before


class FakeUnitOfWork:
    """Records commits and rollbacks of `async with uow.begin()` blocks."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def begin(self):
        try:
            yield self
        except BaseException:
            self.rollbacks += 1
            raise
        self.commits += 1


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
async def background():
    tasks = FireAndForget()
    yield tasks
    await tasks.drain(timeout=1)


@pytest.fixture
def profile_reader() -> FakeProfileReader:
    return FakeProfileReader()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def master_repositories() -> dict[MasterListType, FakeMasterRepository]:
    """Seeded master lists in display order."""
    return {
        MasterListType.LOCATIONS: FakeMasterRepository(
            MasterListType.LOCATIONS,
            LocationResult,
            [
                LocationResult(id="loc-1", city="Mumbai", state="MH"),
                LocationResult(id="loc-2", city="Nagpur", state="MH"),
            ],
        ),
        MasterListType.SERVICES: FakeMasterRepository(
            MasterListType.SERVICES,
            ServiceResult,
            [ServiceResult(id="svc-1", service_name="ICU", description="Intensive care")],
        ),
        MasterListType.SPECIALTIES: FakeMasterRepository(
            MasterListType.SPECIALTIES,
            SpecialtyResult,
            [SpecialtyResult(id="spc-1", specialty_name="Cardiology")],
        ),
    }
