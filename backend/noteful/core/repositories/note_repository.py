from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from noteful.core.models.note import Note
    from noteful.core.services.note_query import NoteQuery


class NoteRepository(ABC):
    """Abstract repository interface for notes.

    Contract used by services and dependency injection. Implementations should
    perform I/O (database, network) and therefore expose async methods. Every
    operation is scoped to the owning user.
    """

    @abstractmethod
    async def create(self, note: Note) -> Note:  # pragma: no cover - interface only
        """Persist a new note and return the stored entity."""

    @abstractmethod
    async def get(self, note_id: UUID, user_id: UUID) -> Note | None:  # pragma: no cover
        """Fetch a note owned by ``user_id`` or return None."""

    @abstractmethod
    async def list(self, query: NoteQuery) -> Sequence[Note]:  # pragma: no cover
        """Return notes matching the query, most recently updated first."""

    @abstractmethod
    async def update_fields(
        self, note_id: UUID, user_id: UUID, changes: dict[str, Any]
    ) -> Note | None:  # pragma: no cover
        """Replace the given fields and return the updated note, or None if missing."""

    @abstractmethod
    async def delete(self, note_id: UUID, user_id: UUID) -> bool:  # pragma: no cover
        """Delete a note. Return True if a row was removed, False otherwise."""

    @abstractmethod
    async def clear_folder(self, folder_id: UUID, user_id: UUID) -> int:  # pragma: no cover
        """Unset ``folder_id`` on every note referencing it. Returns rows touched.

        Idempotent: re-running against notes that no longer reference the
        folder changes nothing.
        """

    @abstractmethod
    async def remove_tag(self, tag_id: UUID, user_id: UUID) -> int:  # pragma: no cover
        """Pull ``tag_id`` out of every note's tag list. Returns rows touched.

        Idempotent, like ``clear_folder``.
        """
