from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field

from .base import ApiModel


class NamedResourceWrite(ApiModel):
    # Presence and emptiness are checked by the service so that a missing
    # name is reported as a 400 like every other domain validation error.
    name: str | None = Field(default=None, description="Name, unique per user")


class FolderWrite(NamedResourceWrite):
    pass


class FolderRead(ApiModel):
    id: UUID
    name: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime | None
