from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from noteful.core.models.base import AppBaseModel


class AuthUser(AppBaseModel):
    """Authenticated user extracted from a verified bearer token."""

    id: UUID
    username: str
    fullname: str | None = None
