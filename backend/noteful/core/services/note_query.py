from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from noteful.utils.validation import require_uuid

if TYPE_CHECKING:
    from uuid import UUID

    from noteful.core.models.note import Note


@dataclass(frozen=True)
class NoteQuery:
    """Criteria for listing a user's notes.

    Always scoped to ``user_id``. ``search_term`` is a case-insensitive
    substring matched against title OR content; ``folder_id`` is an exact
    match; ``tag_id`` matches notes whose tag set contains it. Repositories
    translate the query into their own filter language; ``matches`` is the
    reference predicate.
    """

    user_id: UUID
    search_term: str | None = None
    folder_id: UUID | None = None
    tag_id: UUID | None = None

    @classmethod
    def build(
        cls,
        user_id: UUID,
        *,
        search_term: str | None = None,
        folder_id: str | None = None,
        tag_id: str | None = None,
    ) -> NoteQuery:
        """Build a query from raw request filters, rejecting malformed ids."""
        return cls(
            user_id=user_id,
            search_term=search_term or None,
            folder_id=require_uuid(folder_id, "folderId") if folder_id else None,
            tag_id=require_uuid(tag_id, "tagId") if tag_id else None,
        )

    def matches(self, note: Note) -> bool:
        if note.user_id != self.user_id:
            return False
        if self.search_term:
            needle = self.search_term.casefold()
            haystacks = (note.title, note.content or "")
            if not any(needle in h.casefold() for h in haystacks):
                return False
        if self.folder_id is not None and note.folder_id != self.folder_id:
            return False
        if self.tag_id is not None and self.tag_id not in note.tags:
            return False
        return True
