from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from noteful.api.v1.schemas.auth import LoginRequest, TokenResponse
from noteful.core.errors import AuthenticationError
from noteful.core.schemas.auth import AuthUser
from noteful.core.services.auth_service import AuthService
from noteful.dependencies import get_auth_service, get_current_user, login_rate_limit
from noteful.utils.logging import get_logger

logger = get_logger(__name__)

# Configure router with authentication-specific settings
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        429: {"description": "Too many requests"}
    }
)


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(login_rate_limit)])
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange username and password for a bearer token."""
    try:
        token = await auth_service.sign_in(payload.username, payload.password)
    except AuthenticationError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=err.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    return TokenResponse(authToken=token)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    current_user: AuthUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Trade a still-valid bearer token for a fresh one."""
    return TokenResponse(authToken=auth_service.refresh(current_user))
