from __future__ import annotations

from typing import TYPE_CHECKING, Any

from noteful.core.errors import MissingFieldError
from noteful.core.models.note import Note, ResolvedNote
from noteful.utils.logging import get_logger
from noteful.utils.validation import require_uuid

from .note_query import NoteQuery
from .reference_validator import UNSET, parse_tag_ids

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from pydantic import BaseModel

    from noteful.core.repositories.note_repository import NoteRepository
    from noteful.core.repositories.tag_repository import TagRepository

    from .reference_validator import ReferenceValidator

logger = get_logger(__name__)


class NoteService:
    """Service for managing notes with user-scoped access.

    Writes go through the ReferenceValidator so that a note only ever points
    at folders and tags of its own user; reads expand tag ids into Tag
    entities.
    """

    def __init__(
        self,
        repo: NoteRepository,
        tags: TagRepository,
        validator: ReferenceValidator,
    ) -> None:
        self._repo = repo
        self._tags = tags
        self._validator = validator

    async def list_notes(
        self,
        user_id: UUID,
        *,
        search_term: str | None = None,
        folder_id: str | None = None,
        tag_id: str | None = None,
    ) -> list[ResolvedNote]:
        """List the user's notes, most recently updated first."""
        query = NoteQuery.build(user_id, search_term=search_term, folder_id=folder_id, tag_id=tag_id)
        notes = await self._repo.list(query)
        return await self._resolve(notes, user_id)

    async def get_note(self, note_id: str | UUID, user_id: UUID) -> ResolvedNote | None:
        """Return the note if it exists and belongs to the user; otherwise None."""
        note = await self._repo.get(require_uuid(note_id), user_id)
        if note is None:
            return None
        return (await self._resolve([note], user_id))[0]

    async def create_note(self, create_dto: BaseModel, user_id: UUID) -> ResolvedNote:
        """Create a note after validating its folder and tag references."""
        fields = create_dto.model_dump(exclude_unset=True)
        title = self._require_title(fields.get("title"))

        folder_id, tag_ids = await self._validator.validate_references(
            fields.get("folder_id"), fields.get("tags", []), user_id
        )

        note = Note(
            title=title,
            content=fields.get("content"),
            user_id=user_id,
            folder_id=folder_id,
            tags=tag_ids if tag_ids is not UNSET else [],
        )
        created = await self._repo.create(note)
        logger.info("Note created", extra={"note_id": str(created.id), "user_id": str(user_id)})
        return (await self._resolve([created], user_id))[0]

    async def update_note(self, note_id: str | UUID, update_dto: BaseModel, user_id: UUID) -> ResolvedNote | None:
        """Replace a note's mutable fields.

        ``title`` must be resent on every update. ``folder_id`` is always
        replaced (omitting it moves the note out of its folder); ``content``
        and ``tags`` are replaced only when sent.
        """
        note_uuid = require_uuid(note_id)
        fields = update_dto.model_dump(exclude_unset=True)
        title = self._require_title(fields.get("title"))

        raw_tags = fields.get("tags", UNSET)
        if raw_tags is not UNSET:
            # Fail fast on malformed ids before touching the store
            parse_tag_ids(raw_tags)

        folder_id, tag_ids = await self._validator.validate_references(
            fields.get("folder_id"), raw_tags, user_id
        )

        changes: dict[str, Any] = {"title": title, "folder_id": folder_id}
        if "content" in fields:
            changes["content"] = fields["content"]
        if tag_ids is not UNSET:
            changes["tags"] = tag_ids

        updated = await self._repo.update_fields(note_uuid, user_id, changes)
        if updated is None:
            return None
        return (await self._resolve([updated], user_id))[0]

    async def delete_note(self, note_id: str | UUID, user_id: UUID) -> bool:
        """Delete a user's note. Deleting a missing note is not an error."""
        return await self._repo.delete(require_uuid(note_id), user_id)

    async def _resolve(self, notes: Sequence[Note], user_id: UUID) -> list[ResolvedNote]:
        """Expand tag ids; ids whose tag no longer exists are dropped."""
        wanted = {tag_id for note in notes for tag_id in note.tags}
        found = await self._tags.find_by_ids(wanted, user_id) if wanted else []
        by_id = {tag.id: tag for tag in found}
        return [
            ResolvedNote.from_note(note, [by_id[t] for t in note.tags if t in by_id])
            for note in notes
        ]

    @staticmethod
    def _require_title(title: Any) -> str:
        clean = title.strip() if isinstance(title, str) else ""
        if not clean:
            raise MissingFieldError("title")
        return clean
