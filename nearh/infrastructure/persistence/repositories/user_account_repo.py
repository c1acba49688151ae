"""UserAccount repository: create, authenticate (constant-time on unknown email), delete."""

from __future__ import annotations

import asyncio

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nearh.domain.exceptions import DuplicateResourceException
from nearh.infrastructure.persistence.models.user_account import UserAccount
from nearh.infrastructure.persistence.repositories.base import (
    UNIQUE_VIOLATION,
    BaseRepository,
    pg_error_code,
)
from nearh.infrastructure.security.password import get_password_hash, verify_password

# Lazy dummy hash so unknown emails cost the same bcrypt round as known ones.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(get_password_hash, "not-a-real-password")
    return _dummy_hash_cache


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserAccountRepository(BaseRepository[UserAccount]):
    """Credential store. Hashing runs in a worker thread to keep the event loop free."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, UserAccount)

    async def get_by_email(self, email: str) -> UserAccount | None:
        result = await self.db.execute(
            select(UserAccount).where(UserAccount.email == _normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create_account(self, email: str, password: str) -> str:
        hashed = await asyncio.to_thread(get_password_hash, password)
        try:
            account = await self.add(
                UserAccount(email=_normalize_email(email), hashed_password=hashed)
            )
        except IntegrityError as e:
            if pg_error_code(e) == UNIQUE_VIOLATION:
                raise DuplicateResourceException(
                    "user_account", "An account with this email already exists."
                ) from e
            raise
        return account.id

    async def authenticate(self, email: str, password: str) -> str | None:
        account = await self.get_by_email(email)
        if account is None:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            return None
        if not await asyncio.to_thread(verify_password, password, account.hashed_password):
            return None
        return account.id

    async def delete_account(self, account_id: str) -> bool:
        return await self.delete_by_id(account_id)
