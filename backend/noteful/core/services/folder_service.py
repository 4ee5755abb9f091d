from __future__ import annotations

from typing import TYPE_CHECKING

from noteful.core.models.folder import Folder

from .named_resource_service import NamedResourceService

if TYPE_CHECKING:
    from uuid import UUID

    from noteful.core.repositories.folder_repository import FolderRepository
    from noteful.core.repositories.note_repository import NoteRepository


class FolderService(NamedResourceService[Folder]):
    """Folders: deleting one moves its notes out of any folder."""

    LABEL = "Folder"
    MODEL = Folder

    def __init__(self, repo: FolderRepository, notes: NoteRepository) -> None:
        super().__init__(repo, notes)

    async def _strip_references(self, resource_id: UUID, user_id: UUID) -> int:
        return await self._notes.clear_folder(resource_id, user_id)
