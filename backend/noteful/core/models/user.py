from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import Field

from .base import TimestampedModel


class User(TimestampedModel):
    """Identity anchor. ``password_hash`` never leaves the service layer."""

    id: UUID = Field(default_factory=uuid4, description="Unique user identifier")
    username: str = Field(min_length=1, description="Unique login name")
    password_hash: str = Field(description="Password digest")
    fullname: str | None = Field(default=None, description="Display name")
