from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from noteful.core.models.note import Note
from noteful.core.repositories.note_repository import NoteRepository
from noteful.utils.logging import get_logger

from .base import SupabaseRepository

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from noteful.core.services.note_query import NoteQuery


def _ilike_pattern(term: str) -> str:
    """Quote a search term for a PostgREST ``or`` filter with ``ilike``.

    LIKE wildcards in the term are escaped so it matches literally; the value
    is double-quoted so commas and parentheses survive the filter syntax.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    escaped = escaped.replace('"', '\\"')
    return f'"*{escaped}*"'


class SupabaseNoteRepository(SupabaseRepository, NoteRepository):
    """Supabase implementation of the NoteRepository.

    Uses Supabase's PostgREST client for CRUD. Assumes a `notes` table with columns
    matching the `Note` model fields, ``tags`` being a ``uuid[]`` column. Pulling a
    tag out of every note goes through the ``remove_tag_from_notes`` RPC since
    PostgREST updates cannot express ``array_remove``.
    """

    TABLE_NAME = "notes"
    REMOVE_TAG_RPC = "remove_tag_from_notes"

    async def create(self, note: Note) -> Note:
        row = self._note_to_row(note)
        resp = await self._run(lambda: self._table().insert(row).execute(), operation="insert")
        return self._row_to_note(self._first(resp.data) or row)

    async def get(self, note_id: UUID, user_id: UUID) -> Note | None:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("id", str(note_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute(),
            operation="read",
        )
        row = self._first(resp.data)
        return self._row_to_note(row) if row else None

    async def list(self, query: NoteQuery) -> Sequence[Note]:
        def _query():
            q = self._table().select("*").eq("user_id", str(query.user_id))
            if query.search_term:
                pattern = _ilike_pattern(query.search_term)
                q = q.or_(f"title.ilike.{pattern},content.ilike.{pattern}")
            if query.folder_id is not None:
                q = q.eq("folder_id", str(query.folder_id))
            if query.tag_id is not None:
                q = q.contains("tags", [str(query.tag_id)])
            return q.order("updated_at", desc=True).execute()

        resp = await self._run(_query, operation="list")
        return [self._row_to_note(r) for r in resp.data or []]

    async def update_fields(self, note_id: UUID, user_id: UUID, changes: dict[str, Any]) -> Note | None:
        # Never let a caller move a note to another owner or rewrite its identity
        sanitized: dict[str, Any] = {
            k: v for k, v in (changes or {}).items() if k not in {"id", "user_id", "created_at", "updated_at"}
        }
        if "folder_id" in sanitized and sanitized["folder_id"] is not None:
            sanitized["folder_id"] = str(sanitized["folder_id"])
        if "tags" in sanitized:
            sanitized["tags"] = [str(t) for t in sanitized["tags"] or []]
        sanitized["updated_at"] = datetime.now(UTC).isoformat()

        resp = await self._run(
            lambda: self._table()
            .update(sanitized)
            .eq("id", str(note_id))
            .eq("user_id", str(user_id))
            .execute(),
            operation="update",
        )
        row = self._first(resp.data)
        return self._row_to_note(row) if row else None

    async def delete(self, note_id: UUID, user_id: UUID) -> bool:
        resp = await self._run(
            lambda: self._table()
            .delete()
            .eq("id", str(note_id))
            .eq("user_id", str(user_id))
            .execute(),
            operation="delete",
        )
        return len(resp.data or []) > 0

    async def clear_folder(self, folder_id: UUID, user_id: UUID) -> int:
        resp = await self._run(
            lambda: self._table()
            .update({"folder_id": None})
            .eq("folder_id", str(folder_id))
            .eq("user_id", str(user_id))
            .execute(),
            operation="update",
        )
        touched = len(resp.data or [])
        logger.debug("Cleared folder %s from %d notes", folder_id, touched)
        return touched

    async def remove_tag(self, tag_id: UUID, user_id: UUID) -> int:
        params = {"p_tag_id": str(tag_id), "p_user_id": str(user_id)}
        resp = await self._run(
            lambda: self._client.rpc(self.REMOVE_TAG_RPC, params=params).execute(),
            operation="update",
        )
        touched = resp.data if isinstance(resp.data, int) else 0
        logger.debug("Removed tag %s from %d notes", tag_id, touched)
        return touched

    @staticmethod
    def _row_to_note(row: dict[str, Any]) -> Note:
        normalized = dict(row)
        if normalized.get("tags") is None:
            normalized["tags"] = []
        return Note.model_validate(normalized)

    @staticmethod
    def _note_to_row(note: Note) -> dict[str, Any]:
        # JSON mode renders UUIDs and datetimes as strings for PostgREST
        return note.model_dump(mode="json")
