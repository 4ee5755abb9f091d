from __future__ import annotations

import math
import time

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from noteful.config import settings
from noteful.container import ServiceContainer
from noteful.core.errors import AuthenticationError
from noteful.core.schemas.auth import AuthUser
from noteful.core.services.auth_service import AuthService
from noteful.core.services.folder_service import FolderService
from noteful.core.services.note_service import NoteService
from noteful.core.services.tag_service import TagService
from noteful.core.services.user_service import UserService
from noteful.utils.logging import get_logger

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)

# In-memory rate limiting
_login_attempts: dict[str, list[float]] = {}


def _evict_expired(window_start: float) -> None:
    """Trim attempts outside the window and drop identifiers left with none."""
    for identifier in list(_login_attempts):
        recent = [attempt for attempt in _login_attempts[identifier] if attempt > window_start]
        if recent:
            _login_attempts[identifier] = recent
        else:
            del _login_attempts[identifier]


def _is_rate_limited(identifier: str) -> bool:
    """Check if the identifier is rate limited."""
    if not settings.enable_rate_limiting:
        return False
    now = time.time()
    window_start = now - settings.login_attempt_window
    _evict_expired(window_start)
    attempts = _login_attempts.get(identifier, [])
    if len(attempts) >= settings.max_login_attempts:
        return True
    if identifier not in _login_attempts:
        _login_attempts[identifier] = []
    _login_attempts[identifier].append(now)
    return False


def rate_limit_by_ip(request: Request, operation: str = "default") -> None:
    """Reject the request with 429 when the client IP exceeded its attempts.

    Raises:
        HTTPException: If rate limit is exceeded
    """
    client_ip = request.client.host if request.client else "unknown"
    identifier = f"{operation}:{client_ip}"
    if _is_rate_limited(identifier):
        logger.warning(f"Rate limited {operation} attempt", extra={"ip": client_ip})

        now = time.time()
        window_seconds = settings.login_attempt_window
        limit = settings.max_login_attempts

        attempts = _login_attempts.get(identifier, [])
        earliest_attempt = min(attempts) if attempts else now
        seconds_until_reset = max(1, math.ceil(window_seconds - (now - earliest_attempt)))

        headers = {
            "Retry-After": str(seconds_until_reset),
            "RateLimit-Limit": str(limit),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(seconds_until_reset),
        }

        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many {operation} attempts. Please try again later.",
            headers=headers,
        )


def login_rate_limit(request: Request) -> None:
    rate_limit_by_ip(request, "login")


def signup_rate_limit(request: Request) -> None:
    rate_limit_by_ip(request, "signup")


def get_services(request: Request) -> ServiceContainer:
    """Return the services wired at startup."""
    return request.app.state.services


def get_note_service(services: ServiceContainer = Depends(get_services)) -> NoteService:
    return services.notes


def get_folder_service(services: ServiceContainer = Depends(get_services)) -> FolderService:
    return services.folders


def get_tag_service(services: ServiceContainer = Depends(get_services)) -> TagService:
    return services.tags


def get_user_service(services: ServiceContainer = Depends(get_services)) -> UserService:
    return services.users


def get_auth_service(services: ServiceContainer = Depends(get_services)) -> AuthService:
    return services.auth


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    """Validate the bearer JWT and return the authenticated user."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials
    if not token or len(token.split(".")) != 3:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return auth_service.verify_token(token)
    except AuthenticationError as err:
        logger.warning(
            "JWT validation failed",
            extra={"error_summary": err.message, "jwt_length": len(token)},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=err.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
