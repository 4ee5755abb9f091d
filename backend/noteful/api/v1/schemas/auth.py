from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request to sign in with username and password."""

    username: str = Field(..., description="User's login name")
    password: str = Field(..., description="User's password")


class TokenResponse(BaseModel):
    """Response carrying a bearer token."""

    authToken: str = Field(..., description="JWT bearer token for API calls")  # noqa: N815
