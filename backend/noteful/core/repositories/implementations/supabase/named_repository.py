from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from noteful.core.models.base import OwnedNamedModel
from noteful.core.models.folder import Folder
from noteful.core.models.tag import Tag
from noteful.core.repositories.folder_repository import FolderRepository
from noteful.core.repositories.tag_repository import TagRepository

from .base import SupabaseRepository

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

ModelT = TypeVar("ModelT", bound=OwnedNamedModel)


class SupabaseNamedRepository(SupabaseRepository, Generic[ModelT]):
    """CRUD over a ``(id, name, user_id)`` table with ``unique(name, user_id)``."""

    MODEL: ClassVar[type[OwnedNamedModel]]

    async def create(self, entity: ModelT) -> ModelT:
        row = entity.model_dump(mode="json")
        resp = await self._run(lambda: self._table().insert(row).execute(), operation="insert")
        return self._to_model(self._first(resp.data) or row)

    async def get(self, entity_id: UUID, user_id: UUID) -> ModelT | None:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("id", str(entity_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute(),
            operation="read",
        )
        row = self._first(resp.data)
        return self._to_model(row) if row else None

    async def list(self, user_id: UUID) -> Sequence[ModelT]:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("user_id", str(user_id))
            .order("name")
            .execute(),
            operation="list",
        )
        return [self._to_model(r) for r in resp.data or []]

    async def rename(self, entity_id: UUID, user_id: UUID, name: str) -> ModelT | None:
        changes: dict[str, Any] = {"name": name, "updated_at": datetime.now(UTC).isoformat()}
        resp = await self._run(
            lambda: self._table()
            .update(changes)
            .eq("id", str(entity_id))
            .eq("user_id", str(user_id))
            .execute(),
            operation="update",
        )
        row = self._first(resp.data)
        return self._to_model(row) if row else None

    async def delete(self, entity_id: UUID, user_id: UUID) -> bool:
        resp = await self._run(
            lambda: self._table()
            .delete()
            .eq("id", str(entity_id))
            .eq("user_id", str(user_id))
            .execute(),
            operation="delete",
        )
        return len(resp.data or []) > 0

    def _to_model(self, row: dict[str, Any]) -> ModelT:
        return self.MODEL.model_validate(row)  # type: ignore[return-value]


class SupabaseFolderRepository(SupabaseNamedRepository[Folder], FolderRepository):
    """Supabase implementation of the FolderRepository (``folders`` table)."""

    TABLE_NAME = "folders"
    MODEL = Folder


class SupabaseTagRepository(SupabaseNamedRepository[Tag], TagRepository):
    """Supabase implementation of the TagRepository (``tags`` table)."""

    TABLE_NAME = "tags"
    MODEL = Tag

    async def find_by_ids(self, tag_ids: Collection[UUID], user_id: UUID) -> Sequence[Tag]:
        if not tag_ids:
            return []
        ids = [str(t) for t in tag_ids]
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .in_("id", ids)
            .eq("user_id", str(user_id))
            .execute(),
            operation="read",
        )
        return [self._to_model(r) for r in resp.data or []]
