from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from noteful.core.models.folder import Folder


class FolderRepository(ABC):
    """Abstract repository interface for folders.

    ``(name, user_id)`` is unique; violations raise ``DuplicateKeyError``.
    """

    @abstractmethod
    async def create(self, folder: Folder) -> Folder:  # pragma: no cover - interface only
        """Persist a new folder and return the stored entity."""

    @abstractmethod
    async def get(self, folder_id: UUID, user_id: UUID) -> Folder | None:  # pragma: no cover
        """Fetch a folder owned by ``user_id`` or return None."""

    @abstractmethod
    async def list(self, user_id: UUID) -> Sequence[Folder]:  # pragma: no cover
        """Return the user's folders sorted by name."""

    @abstractmethod
    async def rename(self, folder_id: UUID, user_id: UUID, name: str) -> Folder | None:  # pragma: no cover
        """Rename a folder and return it, or None if missing."""

    @abstractmethod
    async def delete(self, folder_id: UUID, user_id: UUID) -> bool:  # pragma: no cover
        """Delete a folder. Return True if a row was removed."""
