"""Domain errors for the Noteful API.

Every failure the services can report is a ``NotefulError`` carrying an
``ErrorKind``. The HTTP layer maps kinds to status codes in one place
(``noteful.main``), so services and repositories never deal with HTTP.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable error kinds."""

    INVALID_ID = "invalid_id"
    INVALID_REFERENCE = "invalid_reference"
    INVALID_SHAPE = "invalid_shape"
    MISSING_FIELD = "missing_field"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    CASCADE_FAILURE = "cascade_failure"
    UNAUTHORIZED = "unauthorized"
    STORE_FAILURE = "store_failure"


class NotefulError(Exception):
    """Base exception for all Noteful errors.

    Attributes:
        message: Human-readable error message
        kind: Machine-readable error kind
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.INVALID_SHAPE,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.kind = kind
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for serialization."""
        return {
            "error": self.kind.value,
            "message": self.message,
        }

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"[{self.kind.name}] {self.message} ({detail_str})"
        return f"[{self.kind.name}] {self.message}"


class InvalidIdError(NotefulError):
    """Raised when a caller-supplied identifier is malformed."""

    def __init__(self, field: str = "id", message: str | None = None):
        super().__init__(
            message or f"The `{field}` is invalid",
            kind=ErrorKind.INVALID_ID,
            details={"field": field},
        )
        self.field = field


class InvalidReferenceError(NotefulError):
    """Raised when a folder or tag reference is malformed, missing or foreign."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            kind=ErrorKind.INVALID_REFERENCE,
            details={"field": field} if field else None,
        )
        self.field = field


class InvalidShapeError(NotefulError):
    """Raised when a field has the wrong structure (e.g. tags not a list)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            kind=ErrorKind.INVALID_SHAPE,
            details={"field": field} if field else None,
        )
        self.field = field


class MissingFieldError(NotefulError):
    """Raised when a required field is absent or empty."""

    def __init__(self, field: str):
        super().__init__(
            f"Missing `{field}` in request body",
            kind=ErrorKind.MISSING_FIELD,
            details={"field": field},
        )
        self.field = field


class DuplicateKeyError(NotefulError):
    """Raised when a write violates a uniqueness constraint."""

    def __init__(self, message: str = "Duplicate key", table: str | None = None):
        super().__init__(
            message,
            kind=ErrorKind.DUPLICATE_KEY,
            details={"table": table} if table else None,
        )
        self.table = table


class NotFoundError(NotefulError):
    """Raised when a scoped lookup misses."""

    def __init__(self, resource: str):
        super().__init__(
            f"{resource} not found",
            kind=ErrorKind.NOT_FOUND,
            details={"resource": resource},
        )


class CascadeError(NotefulError):
    """Raised when a delete could not strip or remove every reference."""

    def __init__(self, message: str, original_error: Exception | None = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)[:200]
        super().__init__(message, kind=ErrorKind.CASCADE_FAILURE, details=details)
        self.original_error = original_error


class AuthenticationError(NotefulError):
    """Raised when credentials or tokens are rejected."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, kind=ErrorKind.UNAUTHORIZED)


class StoreError(NotefulError):
    """Raised for store failures other than uniqueness violations."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        original_error: Exception | None = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if original_error:
            details["original_error"] = str(original_error)[:200]
        super().__init__(message, kind=ErrorKind.STORE_FAILURE, details=details)
        self.operation = operation
        self.original_error = original_error
