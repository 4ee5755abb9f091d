from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Any
from uuid import UUID  # noqa: TCH003

from pydantic import Field

from .base import ApiModel
from .tag import TagRead  # noqa: TCH001


class NoteWrite(ApiModel):
    """Body of POST and PUT /notes.

    Fields are deliberately loose: the note service distinguishes an omitted
    field from an explicit null (via ``model_fields_set``) and reports
    missing titles and malformed references as domain errors.
    """

    title: str | None = Field(default=None, description="Note title")
    content: str | None = Field(default=None, description="Note content")
    folder_id: Any = Field(default=None, description="Folder id, empty for no folder")
    tags: Any = Field(default=None, description="List of tag ids")


class NoteCreate(NoteWrite):
    pass


class NoteUpdate(NoteWrite):
    pass


class NoteRead(ApiModel):
    id: UUID
    title: str
    content: str | None
    folder_id: UUID | None
    tags: list[TagRead]
    user_id: UUID
    created_at: datetime
    updated_at: datetime | None
