from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import Field, field_validator

from .base import TimestampedModel
from .tag import Tag


class Note(TimestampedModel):
    """Note domain model."""

    id: UUID = Field(default_factory=uuid4, description="Unique note identifier")

    title: str = Field(min_length=1, description="Note title")
    content: str | None = Field(default=None, description="Note content")

    # User and ownership
    user_id: UUID = Field(description="Owner of the note")

    # Organization (references, resolved by id at validation and read time)
    folder_id: UUID | None = Field(default=None, description="Folder holding the note")
    tags: list[UUID] = Field(default_factory=list, description="Referenced tag ids")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Titles are never blank."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("title must be non-empty")
        return stripped

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[UUID]) -> list[UUID]:
        """Collapse duplicate tag ids, keeping first-seen order."""
        return list(dict.fromkeys(v))

    # Prefer Pydantic v2 model_config for OpenAPI examples
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": str(uuid4()),
                    "title": "5 life lessons learned from cats",
                    "content": "Lorem ipsum dolor sit amet.",
                    "folder_id": str(uuid4()),
                    "tags": [str(uuid4())],
                    "user_id": str(uuid4()),
                }
            ]
        }
    }


class ResolvedNote(TimestampedModel):
    """A note whose tag references have been expanded to Tag entities."""

    id: UUID
    title: str
    content: str | None = None
    user_id: UUID
    folder_id: UUID | None = None
    tags: list[Tag] = Field(default_factory=list)

    @classmethod
    def from_note(cls, note: Note, tags: list[Tag]) -> ResolvedNote:
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            user_id=note.user_id,
            folder_id=note.folder_id,
            tags=tags,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
