from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from noteful.core.errors import CascadeError, DuplicateKeyError, MissingFieldError, StoreError
from noteful.core.models.base import OwnedNamedModel
from noteful.utils.logging import get_logger
from noteful.utils.validation import require_uuid

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from noteful.core.repositories.folder_repository import FolderRepository
    from noteful.core.repositories.note_repository import NoteRepository
    from noteful.core.repositories.tag_repository import TagRepository

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=OwnedNamedModel)


class NamedResourceService(ABC, Generic[ModelT]):
    """Shared CRUD for user-owned, uniquely named resources (folders, tags).

    Every lookup is scoped to ``(id, user_id)``: another user's resource is
    reported exactly like a missing one. Deleting a resource first strips the
    references notes hold to it, then removes the row. Both steps are
    idempotent so a failed delete can simply be retried.
    """

    LABEL: ClassVar[str]
    MODEL: ClassVar[type[OwnedNamedModel]]

    def __init__(self, repo: FolderRepository | TagRepository, notes: NoteRepository) -> None:
        self._repo = repo
        self._notes = notes

    async def list_all(self, user_id: UUID) -> Sequence[ModelT]:
        """List the user's resources sorted by name."""
        return await self._repo.list(user_id)

    async def get(self, resource_id: str | UUID, user_id: UUID) -> ModelT | None:
        return await self._repo.get(require_uuid(resource_id), user_id)

    async def create(self, name: str | None, user_id: UUID) -> ModelT:
        entity = self.MODEL(name=self._require_name(name), user_id=user_id)
        try:
            return await self._repo.create(entity)
        except DuplicateKeyError as err:
            raise self._conflict() from err

    async def update(self, resource_id: str | UUID, name: str | None, user_id: UUID) -> ModelT | None:
        """Rename a resource; None when it does not exist under this user."""
        resource_uuid = require_uuid(resource_id)
        clean_name = self._require_name(name)
        try:
            return await self._repo.rename(resource_uuid, user_id, clean_name)
        except DuplicateKeyError as err:
            raise self._conflict() from err

    async def delete(self, resource_id: str | UUID, user_id: UUID) -> bool:
        """Delete a resource and strip every note reference to it.

        Returns whether a row was removed; deleting a missing resource is not
        an error.
        """
        resource_uuid = require_uuid(resource_id)
        try:
            touched = await self._strip_references(resource_uuid, user_id)
            removed = await self._repo.delete(resource_uuid, user_id)
        except StoreError as err:
            logger.error(
                "%s delete cascade failed", self.LABEL,
                extra={"resource_id": str(resource_uuid), "user_id": str(user_id), "error": err.message},
            )
            raise CascadeError(f"Failed to delete {self.LABEL.lower()}", original_error=err) from err

        logger.info(
            "%s deleted", self.LABEL,
            extra={"resource_id": str(resource_uuid), "removed": removed, "notes_updated": touched},
        )
        return removed

    @abstractmethod
    async def _strip_references(self, resource_id: UUID, user_id: UUID) -> int:
        """Remove every note reference to the resource; return how many notes changed."""

    def _conflict(self) -> DuplicateKeyError:
        return DuplicateKeyError(f"{self.LABEL} name already exists")

    @staticmethod
    def _require_name(name: str | None) -> str:
        clean = name.strip() if isinstance(name, str) else ""
        if not clean:
            raise MissingFieldError("name")
        return clean
