"""Hospital repository: rows touched by signup, approval and hospital profile updates."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.infrastructure.persistence.models.hospital import Hospital, HospitalService
from nearh.infrastructure.persistence.repositories.base import BaseRepository

# Columns a hospital admin may edit from the profile screen
EDITABLE_COLUMNS = frozenset(
    {
        "name",
        "official_email",
        "official_phone",
        "emergency_contact",
        "website_url",
        "location_id",
        "has_ayushman_bharat",
        "trauma_level",
    }
)


class HospitalRepository(BaseRepository[Hospital]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Hospital)

    async def create_hospital(self, **fields: Any) -> str:
        hospital = await self.add(Hospital(is_verified=False, **fields))
        return hospital.id

    async def is_verified(self, hospital_id: str) -> bool | None:
        result = await self.db.execute(
            select(Hospital.is_verified).where(Hospital.id == hospital_id)
        )
        return result.scalar_one_or_none()

    async def mark_verified(self, hospital_id: str) -> bool:
        hospital = await self.get_by_id(hospital_id)
        if hospital is None:
            return False
        await self.apply(hospital, {"is_verified": True})
        return True

    async def update_hospital(self, hospital_id: str, **fields: Any) -> bool:
        """Update editable columns. Unknown column names raise ValueError."""
        unknown = set(fields) - EDITABLE_COLUMNS
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        hospital = await self.get_by_id(hospital_id)
        if hospital is None:
            return False
        if fields:
            await self.apply(hospital, fields)
        return True

    async def replace_services(self, hospital_id: str, service_ids: list[str]) -> None:
        await self.db.execute(
            delete(HospitalService).where(HospitalService.hospital_id == hospital_id)
        )
        unique_ids = list(dict.fromkeys(service_ids))
        if unique_ids:
            await self.db.execute(
                insert(HospitalService),
                [{"hospital_id": hospital_id, "service_id": sid} for sid in unique_ids],
            )

    async def delete_hospital(self, hospital_id: str) -> bool:
        return await self.delete_by_id(hospital_id)
