from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

    from noteful.core.models.tag import Tag


class TagRepository(ABC):
    """Abstract repository interface for tags.

    ``(name, user_id)`` is unique; violations raise ``DuplicateKeyError``.
    """

    @abstractmethod
    async def create(self, tag: Tag) -> Tag:  # pragma: no cover - interface only
        """Persist a new tag and return the stored entity."""

    @abstractmethod
    async def get(self, tag_id: UUID, user_id: UUID) -> Tag | None:  # pragma: no cover
        """Fetch a tag owned by ``user_id`` or return None."""

    @abstractmethod
    async def list(self, user_id: UUID) -> Sequence[Tag]:  # pragma: no cover
        """Return the user's tags sorted by name."""

    @abstractmethod
    async def find_by_ids(self, tag_ids: Collection[UUID], user_id: UUID) -> Sequence[Tag]:  # pragma: no cover
        """Return the subset of ``tag_ids`` that exist and belong to ``user_id``."""

    @abstractmethod
    async def rename(self, tag_id: UUID, user_id: UUID, name: str) -> Tag | None:  # pragma: no cover
        """Rename a tag and return it, or None if missing."""

    @abstractmethod
    async def delete(self, tag_id: UUID, user_id: UUID) -> bool:  # pragma: no cover
        """Delete a tag. Return True if a row was removed."""
