from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from noteful.utils.validation import validate_credential_field

from .base import ApiModel


class UserCreate(ApiModel):
    """Registration request; violations surface as 422 validation errors."""

    username: str = Field(..., description="Login name, at least 6 characters")
    password: str = Field(..., description="Password, 8 to 72 characters")
    fullname: str | None = Field(default=None, description="Display name")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return validate_credential_field("username", v, min_length=6)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_credential_field("password", v, min_length=8, max_length=72)

    @field_validator("fullname")
    @classmethod
    def trim_fullname(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class UserRead(ApiModel):
    id: UUID
    username: str
    fullname: str | None
    created_at: datetime
    updated_at: datetime | None
