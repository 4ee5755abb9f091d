"""In-memory repositories for testing.

They implement the repository ABCs with the same scoping and uniqueness
semantics as the Supabase tables: every read/write is filtered by
``user_id`` and ``(name, user_id)`` / ``username`` collisions raise
``DuplicateKeyError``. Any operation name added to ``fail_on`` raises
``StoreError`` instead of running, to exercise failure paths.
"""
from __future__ import annotations

from typing import Any
from uuid import UUID

from noteful.core.errors import DuplicateKeyError, StoreError
from noteful.core.models.base import OwnedNamedModel, utcnow
from noteful.core.models.folder import Folder
from noteful.core.models.note import Note
from noteful.core.models.tag import Tag
from noteful.core.models.user import User
from noteful.core.repositories.folder_repository import FolderRepository
from noteful.core.repositories.note_repository import NoteRepository
from noteful.core.repositories.tag_repository import TagRepository
from noteful.core.repositories.user_repository import UserRepository
from noteful.core.services.note_query import NoteQuery


class _FailureSwitch:
    table = "rows"

    def __init__(self) -> None:
        self.fail_on: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreError(f"Failed to {operation} {self.table}", operation=operation)


class _FakeNamedRepository(_FailureSwitch):
    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[UUID, OwnedNamedModel] = {}

    def _taken(self, name: str, user_id: UUID, exclude: UUID | None = None) -> bool:
        return any(
            r.name == name and r.user_id == user_id and r.id != exclude
            for r in self.rows.values()
        )

    async def create(self, entity):
        self._check("create")
        if self._taken(entity.name, entity.user_id):
            raise DuplicateKeyError(table=self.table)
        self.rows[entity.id] = entity
        return entity

    async def get(self, entity_id, user_id):
        self._check("get")
        row = self.rows.get(entity_id)
        return row if row is not None and row.user_id == user_id else None

    async def list(self, user_id):
        self._check("list")
        return sorted((r for r in self.rows.values() if r.user_id == user_id), key=lambda r: r.name)

    async def rename(self, entity_id, user_id, name):
        self._check("rename")
        row = await self.get(entity_id, user_id)
        if row is None:
            return None
        if self._taken(name, user_id, exclude=entity_id):
            raise DuplicateKeyError(table=self.table)
        # revalidate like a row read back from the store
        updated = type(row).model_validate({**row.model_dump(), "name": name, "updated_at": utcnow()})
        self.rows[entity_id] = updated
        return updated

    async def delete(self, entity_id, user_id):
        self._check("delete")
        row = self.rows.get(entity_id)
        if row is None or row.user_id != user_id:
            return False
        del self.rows[entity_id]
        return True


class FakeFolderRepository(_FakeNamedRepository, FolderRepository):
    table = "folders"


class FakeTagRepository(_FakeNamedRepository, TagRepository):
    table = "tags"

    async def find_by_ids(self, tag_ids, user_id):
        self._check("find_by_ids")
        wanted = set(tag_ids)
        return [r for r in self.rows.values() if r.id in wanted and r.user_id == user_id]


class FakeNoteRepository(_FailureSwitch, NoteRepository):
    table = "notes"

    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[UUID, Note] = {}

    async def create(self, note: Note) -> Note:
        self._check("create")
        self.rows[note.id] = note
        return note

    async def get(self, note_id: UUID, user_id: UUID) -> Note | None:
        self._check("get")
        row = self.rows.get(note_id)
        return row if row is not None and row.user_id == user_id else None

    async def list(self, query: NoteQuery) -> list[Note]:
        self._check("list")
        found = [n for n in self.rows.values() if query.matches(n)]
        return sorted(found, key=lambda n: n.updated_at, reverse=True)

    async def update_fields(self, note_id: UUID, user_id: UUID, changes: dict[str, Any]) -> Note | None:
        self._check("update_fields")
        row = await self.get(note_id, user_id)
        if row is None:
            return None
        allowed = {k: v for k, v in changes.items() if k not in {"id", "user_id", "created_at", "updated_at"}}
        updated = Note.model_validate({**row.model_dump(), **allowed, "updated_at": utcnow()})
        self.rows[note_id] = updated
        return updated

    async def delete(self, note_id: UUID, user_id: UUID) -> bool:
        self._check("delete")
        row = self.rows.get(note_id)
        if row is None or row.user_id != user_id:
            return False
        del self.rows[note_id]
        return True

    async def clear_folder(self, folder_id: UUID, user_id: UUID) -> int:
        self._check("clear_folder")
        touched = 0
        for note in list(self.rows.values()):
            if note.user_id == user_id and note.folder_id == folder_id:
                self.rows[note.id] = note.model_copy(update={"folder_id": None})
                touched += 1
        return touched

    async def remove_tag(self, tag_id: UUID, user_id: UUID) -> int:
        self._check("remove_tag")
        touched = 0
        for note in list(self.rows.values()):
            if note.user_id == user_id and tag_id in note.tags:
                remaining = [t for t in note.tags if t != tag_id]
                self.rows[note.id] = note.model_copy(update={"tags": remaining})
                touched += 1
        return touched


class FakeUserRepository(_FailureSwitch, UserRepository):
    table = "users"

    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[UUID, User] = {}

    async def create(self, user: User) -> User:
        self._check("create")
        if any(u.username == user.username for u in self.rows.values()):
            raise DuplicateKeyError(table=self.table)
        self.rows[user.id] = user
        return user

    async def get(self, user_id: UUID) -> User | None:
        self._check("get")
        return self.rows.get(user_id)

    async def get_by_username(self, username: str) -> User | None:
        self._check("get_by_username")
        return next((u for u in self.rows.values() if u.username == username), None)

    async def ping(self) -> None:
        self._check("ping")


def make_folder(user_id: UUID, name: str = "Work") -> Folder:
    return Folder(name=name, user_id=user_id)


def make_tag(user_id: UUID, name: str = "urgent") -> Tag:
    return Tag(name=name, user_id=user_id)
