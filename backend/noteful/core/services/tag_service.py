from __future__ import annotations

from typing import TYPE_CHECKING

from noteful.core.models.tag import Tag

from .named_resource_service import NamedResourceService

if TYPE_CHECKING:
    from uuid import UUID

    from noteful.core.repositories.note_repository import NoteRepository
    from noteful.core.repositories.tag_repository import TagRepository


class TagService(NamedResourceService[Tag]):
    """Tags: deleting one pulls it out of every note's tag list."""

    LABEL = "Tag"
    MODEL = Tag

    def __init__(self, repo: TagRepository, notes: NoteRepository) -> None:
        super().__init__(repo, notes)

    async def _strip_references(self, resource_id: UUID, user_id: UUID) -> int:
        return await self._notes.remove_tag(resource_id, user_id)
