"""Base repository: generic lookups and writes over one ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.infrastructure.persistence.database import Base

# PostgreSQL SQLSTATE codes surfaced through IntegrityError.orig
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

ModelType = TypeVar("ModelType", bound=Base)


def pg_error_code(error: IntegrityError) -> str | None:
    """Return the SQLSTATE of an IntegrityError raised by asyncpg/psycopg, if any."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, add, delete_by_id.

    Writes only flush; the caller owns the transaction (session.begin()).
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new record and refresh server-side defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply(self, obj: ModelType, fields: dict[str, Any]) -> ModelType:
        """Set attributes on an attached record and flush."""
        for name, value in fields.items():
            setattr(obj, name, value)
        await self.db.flush()
        return obj

    async def delete_by_id(self, entity_id: str) -> bool:
        """Delete the record with entity_id. Returns False if it does not exist."""
        obj = await self.get_by_id(entity_id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self.db.flush()
        return True
