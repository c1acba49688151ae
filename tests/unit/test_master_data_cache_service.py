"""MasterDataCacheService unit tests: versioned list caching, retry and fallback."""

import logging
import time

import pytest

from nearh.application.dtos.master_data import LocationResult, ServiceResult
from nearh.application.services.master_data_cache_service import MasterDataCacheService
from nearh.domain.enums import MasterListType
from nearh.infrastructure.cache.keys import master_list_key

SERVICE_LOGGER = "nearh.application.services.master_data_cache_service"


@pytest.fixture
def service(master_repositories, cache, background) -> MasterDataCacheService:
    return MasterDataCacheService(
        master_repositories,
        cache=cache,
        background=background,
        version="v1",
        ttl=86400,
        retries=3,
        retry_base_delay=0,
    )


async def test_miss_fetches_ordered_list_and_backfills(
    service, master_repositories, cache, background
) -> None:
    locations = await service.get_cached_locations()
    await background.drain()

    assert [loc.city for loc in locations] == ["Mumbai", "Nagpur"]
    assert master_repositories[MasterListType.LOCATIONS].calls == 1
    assert cache.ttls["v1:locations"] == 86400
    assert await cache.get("v1:locations") == [
        {"id": "loc-1", "city": "Mumbai", "state": "MH"},
        {"id": "loc-2", "city": "Nagpur", "state": "MH"},
    ]


async def test_hit_returns_cached_list_without_database(
    service, master_repositories, cache
) -> None:
    cache.put("v1:services", [{"id": "svc-9", "service_name": "Dialysis", "description": None}])

    services = await service.get_cached_services()

    assert services == [ServiceResult(id="svc-9", service_name="Dialysis")]
    assert master_repositories[MasterListType.SERVICES].calls == 0


async def test_empty_database_result_is_not_cached(
    service, master_repositories, cache, background
) -> None:
    master_repositories[MasterListType.SPECIALTIES].items = []

    assert await service.get_cached_specialties() == []
    await background.drain()

    assert cache.set_calls == 0
    assert "v1:specialties" not in cache.data


async def test_cached_empty_list_is_treated_as_miss(service, master_repositories, cache) -> None:
    cache.put("v1:locations", [])

    locations = await service.get_cached_locations()

    assert len(locations) == 2
    assert master_repositories[MasterListType.LOCATIONS].calls == 1


async def test_add_then_invalidate_all_shows_new_location(
    service, master_repositories, background
) -> None:
    """After a write and a bulk invalidation the next read includes the new row."""
    await service.get_cached_locations()
    await background.drain()

    repo = master_repositories[MasterListType.LOCATIONS]
    repo.items.append(LocationResult(id="loc-3", city="Pune", state="MH"))
    await service.invalidate_all_master_caches()
    calls_before = repo.calls

    locations = await service.get_cached_locations()

    assert "Pune" in [loc.city for loc in locations]
    assert repo.calls == calls_before + 1


async def test_invalidate_all_deletes_every_versioned_key(service, cache) -> None:
    await service.invalidate_all_master_caches()
    assert sorted(cache.delete_calls) == ["v1:locations", "v1:services", "v1:specialties"]


async def test_invalidate_all_continues_when_cache_fails(service, cache, caplog) -> None:
    cache.fail_delete = True

    with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
        await service.invalidate_all_master_caches()

    assert len(cache.delete_calls) == 3
    messages = [record.getMessage() for record in caplog.records]
    assert "[Cache] All master caches invalidated" not in messages
    assert "[Cache] Master caches not invalidated: locations, services, specialties" in messages


async def test_invalidate_all_reports_success(service, caplog) -> None:
    with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
        await service.invalidate_all_master_caches()

    assert "[Cache] All master caches invalidated" in [r.getMessage() for r in caplog.records]


async def test_invalidation_cancels_every_overlapping_backfill(
    service, master_repositories, cache, background
) -> None:
    await service.get_cached_locations()
    await service.get_cached_locations()
    assert background.pending == 2

    master_repositories[MasterListType.LOCATIONS].items.pop()
    await service.invalidate_locations_cache()
    await background.drain()

    assert "v1:locations" not in cache.data
    assert [loc.city for loc in await service.get_cached_locations()] == ["Mumbai"]


async def test_single_list_invalidation_helpers(service, cache) -> None:
    await service.invalidate_locations_cache()
    await service.invalidate_services_cache()
    await service.invalidate_specialties_cache()
    assert cache.delete_calls == ["v1:locations", "v1:services", "v1:specialties"]


async def test_transient_failures_are_retried(service, master_repositories) -> None:
    """Two failures then success: three database calls, full list returned."""
    repo = master_repositories[MasterListType.LOCATIONS]
    repo.failures = 2

    locations = await service.get_cached_locations()

    assert len(locations) == 2
    assert repo.calls == 3


async def test_retry_backoff_doubles_from_base_delay(master_repositories, cache, background) -> None:
    """Three attempts wait 1s then 2s between them before the direct attempt."""
    sleeps: list[float] = []

    async def record_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    service = MasterDataCacheService(
        master_repositories, cache=cache, background=background, sleep=record_sleep
    )
    repo = master_repositories[MasterListType.LOCATIONS]
    repo.failures = 3

    locations = await service.get_cached_locations()

    assert sleeps == [1.0, 2.0]
    assert len(locations) == 2
    assert repo.calls == 4


async def test_direct_attempt_after_retries_are_exhausted(service, master_repositories) -> None:
    repo = master_repositories[MasterListType.LOCATIONS]
    repo.failures = 3

    locations = await service.get_cached_locations()

    assert len(locations) == 2
    assert repo.calls == 4


async def test_total_database_failure_returns_empty_list(
    service, master_repositories, cache, background
) -> None:
    repo = master_repositories[MasterListType.SERVICES]
    repo.failures = 10

    assert await service.get_cached_services() == []
    await background.drain()

    assert repo.calls == 4
    assert cache.set_calls == 0


async def test_hung_cache_read_falls_back_to_database(master_repositories, cache, background) -> None:
    cache.hang_on_get = True
    service = MasterDataCacheService(
        master_repositories,
        cache=cache,
        background=background,
        read_timeout=0.05,
        retry_base_delay=0,
    )

    started = time.perf_counter()
    locations = await service.get_cached_locations()
    elapsed = time.perf_counter() - started

    assert len(locations) == 2
    assert elapsed < service.read_timeout + 0.25


async def test_undecodable_entry_is_treated_as_miss(service, master_repositories, cache) -> None:
    cache.put("v1:locations", [{"city": "Mumbai"}])

    locations = await service.get_cached_locations()

    assert len(locations) == 2
    assert master_repositories[MasterListType.LOCATIONS].calls == 1


async def test_version_change_ignores_old_keys(master_repositories, cache, background) -> None:
    cache.put("v1:locations", [{"id": "old", "city": "Old", "state": "XX"}])
    service = MasterDataCacheService(
        master_repositories, cache=cache, background=background, version="v2", retry_base_delay=0
    )

    locations = await service.get_cached_locations()

    assert [loc.id for loc in locations] == ["loc-1", "loc-2"]
    assert master_list_key("v2", MasterListType.LOCATIONS) == "v2:locations"


async def test_works_without_cache(master_repositories) -> None:
    service = MasterDataCacheService(master_repositories, cache=None, retry_base_delay=0)

    assert len(await service.get_cached_specialties()) == 1
    await service.invalidate_all_master_caches()
