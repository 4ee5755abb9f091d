from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field, field_validator, model_validator


def utcnow() -> datetime:
    return datetime.now(UTC)


class AppBaseModel(PydanticBaseModel):
    """Base model for all domain models."""

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
    )


class TimestampedModel(AppBaseModel):
    """Base model with timestamp fields.

    A freshly built entity gets ``updated_at == created_at`` so that listings
    ordered by modification time include never-edited rows.
    """

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def default_updated_at(self) -> TimestampedModel:
        if self.updated_at is None:
            self.updated_at = self.created_at
        return self


class OwnedNamedModel(TimestampedModel):
    """A user-owned entity identified by a name unique per owner."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    user_id: UUID

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("name must be non-empty")
        return stripped
