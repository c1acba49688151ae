"""DTOs for master-data reference lists (locations, services, specialties)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Union


@dataclass(frozen=True)
class LocationResult:
    """Location (city within a state). Lists are ordered by city."""

    id: str
    city: str
    state: str


@dataclass(frozen=True)
class ServiceResult:
    """Hospital service (e.g. ICU, blood bank). Lists are ordered by service_name."""

    id: str
    service_name: str
    description: str | None = None


@dataclass(frozen=True)
class SpecialtyResult:
    """Medical specialty (e.g. cardiology). Lists are ordered by specialty_name."""

    id: str
    specialty_name: str


MasterItem = Union[LocationResult, ServiceResult, SpecialtyResult]


def master_item_to_cache(item: MasterItem) -> dict[str, Any]:
    """Serialize a master-data item to a JSON-compatible dict."""
    return asdict(item)
