from __future__ import annotations

from typing import Any
from uuid import UUID

from noteful.core.errors import InvalidIdError


def parse_uuid(value: Any) -> UUID | None:
    """Return ``value`` as a UUID, or None when it is not a well-formed id."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


def require_uuid(value: Any, field: str = "id") -> UUID:
    """Parse an identifier or raise ``InvalidIdError`` naming the field."""
    parsed = parse_uuid(value)
    if parsed is None:
        raise InvalidIdError(field)
    return parsed


def validate_credential_field(name: str, value: str, *, min_length: int, max_length: int | None = None) -> str:
    """Validate a username/password field: untrimmed and within length bounds."""
    if value.strip() != value:
        raise ValueError("Cannot start or end with whitespace")
    if len(value) < min_length:
        raise ValueError(f"Field: '{name}' must be at least {min_length} characters long")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"Field: '{name}' must be at most {max_length} characters long")
    return value
