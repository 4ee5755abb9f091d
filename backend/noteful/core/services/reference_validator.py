"""Validation of folder and tag references on note writes.

A note may only point at a folder and tags owned by the same user. Checks
happen before the write and are advisory: a folder or tag deleted between
validation and commit is cleaned up later by that entity's delete path.
"""
from __future__ import annotations

import asyncio
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from noteful.core.errors import InvalidReferenceError, InvalidShapeError
from noteful.utils.validation import parse_uuid

if TYPE_CHECKING:
    from uuid import UUID

    from noteful.core.repositories.folder_repository import FolderRepository
    from noteful.core.repositories.tag_repository import TagRepository


class Unset(Enum):
    """Marker for a field the caller did not send at all."""

    UNSET = "UNSET"


UNSET = Unset.UNSET

FOLDER_ID_INVALID = "The `folderId` is invalid"
TAGS_NOT_A_LIST = "The `tags` must be an array"
TAG_ID_INVALID = "The tags `id` is invalid"
TAG_REFERENCE_INVALID = "The tags array contains an invalid id"


def parse_tag_ids(tag_ids: Any) -> list[UUID]:
    """Check the shape of a tag id list and return its distinct ids in order.

    Raises ``InvalidShapeError`` if ``tag_ids`` is not a list, and
    ``InvalidReferenceError`` if any element is not a well-formed id.
    """
    if isinstance(tag_ids, str) or not isinstance(tag_ids, Sequence):
        raise InvalidShapeError(TAGS_NOT_A_LIST, field="tags")
    parsed = [parse_uuid(t) for t in tag_ids]
    if any(p is None for p in parsed):
        raise InvalidReferenceError(TAG_ID_INVALID, field="tags")
    return list(dict.fromkeys(parsed))  # type: ignore[arg-type]


class ReferenceValidator:
    """Confirms that referenced folders and tags exist under the owning user."""

    def __init__(self, folders: FolderRepository, tags: TagRepository) -> None:
        self._folders = folders
        self._tags = tags

    async def validate_folder_reference(self, folder_id: Any, user_id: UUID) -> UUID | None:
        """Return the folder id to store, or None for "no folder"."""
        if not folder_id:
            return None
        folder_uuid = parse_uuid(folder_id)
        if folder_uuid is None:
            raise InvalidReferenceError(FOLDER_ID_INVALID, field="folderId")
        folder = await self._folders.get(folder_uuid, user_id)
        if folder is None:
            raise InvalidReferenceError(FOLDER_ID_INVALID, field="folderId")
        return folder_uuid

    async def validate_tag_references(self, tag_ids: Any, user_id: UUID) -> list[UUID] | Unset:
        """Return the distinct tag ids to store, or UNSET when tags were not sent.

        All-or-nothing: one unknown or foreign id rejects the whole list.
        """
        if tag_ids is UNSET:
            return UNSET
        distinct = parse_tag_ids(tag_ids)
        if not distinct:
            return []
        found = await self._tags.find_by_ids(distinct, user_id)
        if len({t.id for t in found}) < len(distinct):
            raise InvalidReferenceError(TAG_REFERENCE_INVALID, field="tags")
        return distinct

    async def validate_references(
        self, folder_id: Any, tag_ids: Any, user_id: UUID
    ) -> tuple[UUID | None, list[UUID] | Unset]:
        """Run both checks concurrently and surface exactly one error.

        When both fail, the folder error wins.
        """
        folder_result, tags_result = await asyncio.gather(
            self.validate_folder_reference(folder_id, user_id),
            self.validate_tag_references(tag_ids, user_id),
            return_exceptions=True,
        )
        if isinstance(folder_result, BaseException):
            raise folder_result
        if isinstance(tags_result, BaseException):
            raise tags_result
        return folder_result, tags_result
