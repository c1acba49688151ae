"""Master-data repositories: locations, services_list, specialties_list.

list_all returns the complete list in display order and wraps driver
failures in MasterDataFetchError (the master-data cache retries on it).
Writes translate PostgreSQL constraint violations into domain exceptions.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, NoReturn

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.application.dtos.master_data import (
    LocationResult,
    MasterItem,
    ServiceResult,
    SpecialtyResult,
)
from nearh.domain.enums import MasterListType
from nearh.domain.exceptions import (
    DuplicateResourceException,
    MasterDataFetchError,
    ResourceInUseException,
    ValidationException,
)
from nearh.infrastructure.persistence.models.location import Location
from nearh.infrastructure.persistence.models.service import ServiceListItem
from nearh.infrastructure.persistence.models.specialty import Specialty
from nearh.infrastructure.persistence.repositories.base import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    BaseRepository,
    pg_error_code,
)

logger = logging.getLogger(__name__)


class MasterListRepository(BaseRepository[Any], ABC):
    """Shared CRUD for one master list. Subclasses set the class attributes."""

    list_type: ClassVar[MasterListType]
    model_class: ClassVar[type]
    order_column: ClassVar[str]
    writable_columns: ClassVar[frozenset[str]]
    duplicate_message: ClassVar[str]
    in_use_message: ClassVar[str]

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, self.model_class)

    @abstractmethod
    def _to_result(self, row: Any) -> MasterItem:
        """Map one ORM row to its result DTO."""

    async def list_all(self) -> list[MasterItem]:
        try:
            result = await self.db.execute(
                select(self.model).order_by(getattr(self.model, self.order_column).asc())
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.warning("Fetching %s failed: %s", self.list_type.value, e)
            await self.db.rollback()
            raise MasterDataFetchError(self.list_type.value, e) from e
        return [self._to_result(row) for row in rows]

    def _check_columns(self, fields: dict[str, Any]) -> None:
        unknown = set(fields) - self.writable_columns
        if unknown:
            raise ValidationException(
                f"Unknown field(s) for {self.list_type.value}: {', '.join(sorted(unknown))}"
            )

    async def create_item(self, **fields: Any) -> MasterItem:
        self._check_columns(fields)
        try:
            row = await self.add(self.model(**fields))
        except IntegrityError as e:
            self._raise_for_integrity(e, None)
        return self._to_result(row)

    async def update_item(self, item_id: str, **fields: Any) -> MasterItem | None:
        self._check_columns(fields)
        row = await self.get_by_id(item_id)
        if row is None:
            return None
        try:
            await self.apply(row, fields)
        except IntegrityError as e:
            self._raise_for_integrity(e, item_id)
        return self._to_result(row)

    async def delete_item(self, item_id: str) -> bool:
        try:
            return await self.delete_by_id(item_id)
        except IntegrityError as e:
            self._raise_for_integrity(e, item_id)

    def _raise_for_integrity(self, error: IntegrityError, item_id: str | None) -> NoReturn:
        code = pg_error_code(error)
        if code == UNIQUE_VIOLATION:
            raise DuplicateResourceException(self.list_type.value, self.duplicate_message) from error
        if code == FOREIGN_KEY_VIOLATION:
            raise ResourceInUseException(
                self.list_type.value, item_id or "", self.in_use_message
            ) from error
        raise error


class LocationRepository(MasterListRepository):
    list_type = MasterListType.LOCATIONS
    model_class = Location
    order_column = "city"
    writable_columns = frozenset({"city", "state"})
    duplicate_message = "This city already exists in this state."
    in_use_message = "Cannot delete. Hospitals are currently registered in this location."

    def _to_result(self, row: Location) -> LocationResult:
        return LocationResult(id=row.id, city=row.city, state=row.state)


class ServiceListRepository(MasterListRepository):
    list_type = MasterListType.SERVICES
    model_class = ServiceListItem
    order_column = "service_name"
    writable_columns = frozenset({"service_name", "description"})
    duplicate_message = "Service name already exists."
    in_use_message = "Cannot delete. This service is currently linked to hospitals."

    def _to_result(self, row: ServiceListItem) -> ServiceResult:
        return ServiceResult(id=row.id, service_name=row.service_name, description=row.description)


class SpecialtyRepository(MasterListRepository):
    list_type = MasterListType.SPECIALTIES
    model_class = Specialty
    order_column = "specialty_name"
    writable_columns = frozenset({"specialty_name"})
    duplicate_message = "Specialty already exists."
    in_use_message = "Cannot delete. This specialty is still referenced."

    def _to_result(self, row: Specialty) -> SpecialtyResult:
        return SpecialtyResult(id=row.id, specialty_name=row.specialty_name)


MASTER_REPOSITORIES: dict[MasterListType, type[MasterListRepository]] = {
    MasterListType.LOCATIONS: LocationRepository,
    MasterListType.SERVICES: ServiceListRepository,
    MasterListType.SPECIALTIES: SpecialtyRepository,
}


def master_repositories(db: AsyncSession) -> dict[MasterListType, MasterListRepository]:
    """Instantiate one repository per master list on the same session."""
    return {list_type: repo(db) for list_type, repo in MASTER_REPOSITORIES.items()}
