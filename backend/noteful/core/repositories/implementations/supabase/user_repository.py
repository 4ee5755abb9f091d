from __future__ import annotations

from typing import TYPE_CHECKING

from noteful.core.models.user import User
from noteful.core.repositories.user_repository import UserRepository

from .base import SupabaseRepository

if TYPE_CHECKING:
    from uuid import UUID


class SupabaseUserRepository(SupabaseRepository, UserRepository):
    """Supabase implementation of the UserRepository (``users`` table)."""

    TABLE_NAME = "users"

    async def create(self, user: User) -> User:
        row = user.model_dump(mode="json")
        resp = await self._run(lambda: self._table().insert(row).execute(), operation="insert")
        return User.model_validate(self._first(resp.data) or row)

    async def get(self, user_id: UUID) -> User | None:
        resp = await self._run(
            lambda: self._table().select("*").eq("id", str(user_id)).limit(1).execute(),
            operation="read",
        )
        row = self._first(resp.data)
        return User.model_validate(row) if row else None

    async def get_by_username(self, username: str) -> User | None:
        resp = await self._run(
            lambda: self._table().select("*").eq("username", username).limit(1).execute(),
            operation="read",
        )
        row = self._first(resp.data)
        return User.model_validate(row) if row else None

    async def ping(self) -> None:
        await self._run(lambda: self._table().select("id").limit(1).execute(), operation="read")
