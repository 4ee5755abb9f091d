from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from noteful.core.models.user import User


class UserRepository(ABC):
    """Abstract repository interface for users. ``username`` is unique."""

    @abstractmethod
    async def create(self, user: User) -> User:  # pragma: no cover - interface only
        """Persist a new user; raises ``DuplicateKeyError`` on a taken username."""

    @abstractmethod
    async def get(self, user_id: UUID) -> User | None:  # pragma: no cover
        """Fetch a user by id."""

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:  # pragma: no cover
        """Fetch a user by login name."""

    @abstractmethod
    async def ping(self) -> None:  # pragma: no cover
        """Raise if the store cannot be reached."""
