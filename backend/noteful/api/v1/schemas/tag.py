from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from .base import ApiModel
from .folder import NamedResourceWrite


class TagWrite(NamedResourceWrite):
    pass


class TagRead(ApiModel):
    id: UUID
    name: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime | None
