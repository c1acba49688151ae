"""Master-data CRUD (superadmin back office) with invalidate-on-write.

Every successful write drops all three cached lists after the transaction
commits; the next read of each list repopulates it from the database.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from nearh.application.dtos.master_data import MasterItem
from nearh.application.interfaces.repositories import IMasterListRepository
from nearh.application.interfaces.services import IMasterListInvalidator, IUnitOfWork
from nearh.domain.enums import MasterListType
from nearh.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

# Singular names used in not-found errors
_RESOURCE_NAMES = {
    MasterListType.LOCATIONS: "location",
    MasterListType.SERVICES: "service",
    MasterListType.SPECIALTIES: "specialty",
}


class MasterDataService:
    """add_item / update_item / delete_item for any master list."""

    def __init__(
        self,
        uow: IUnitOfWork,
        repositories: Mapping[MasterListType, IMasterListRepository],
        master_cache: IMasterListInvalidator,
    ) -> None:
        self.uow = uow
        self.repositories = repositories
        self.master_cache = master_cache

    def _repo(self, list_type: MasterListType) -> IMasterListRepository:
        return self.repositories[list_type]

    async def add_item(self, list_type: MasterListType, **fields: Any) -> MasterItem:
        """Insert a row. Raises DuplicateResourceException on a uniqueness clash."""
        async with self.uow.begin():
            item = await self._repo(list_type).create_item(**fields)
        await self.master_cache.invalidate_all_master_caches()
        logger.info("Added %s %s", _RESOURCE_NAMES[list_type], item.id)
        return item

    async def update_item(
        self, list_type: MasterListType, item_id: str, **fields: Any
    ) -> MasterItem:
        """Update a row.

        Raises:
            ValidationException: No fields given.
            ResourceNotFoundException: Row does not exist.
            DuplicateResourceException: Update clashes with another row.
        """
        if not fields:
            raise ValidationException("At least one field is required")
        async with self.uow.begin():
            item = await self._repo(list_type).update_item(item_id, **fields)
            if item is None:
                raise ResourceNotFoundException(_RESOURCE_NAMES[list_type], item_id)
        await self.master_cache.invalidate_all_master_caches()
        return item

    async def delete_item(self, list_type: MasterListType, item_id: str) -> None:
        """Delete a row.

        Raises:
            ResourceNotFoundException: Row does not exist.
            ResourceInUseException: Other rows still reference it.
        """
        async with self.uow.begin():
            if not await self._repo(list_type).delete_item(item_id):
                raise ResourceNotFoundException(_RESOURCE_NAMES[list_type], item_id)
        await self.master_cache.invalidate_all_master_caches()
        logger.info("Deleted %s %s", _RESOURCE_NAMES[list_type], item_id)
