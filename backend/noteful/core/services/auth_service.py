from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from pwdlib import PasswordHash

from noteful.core.errors import AuthenticationError
from noteful.core.schemas.auth import AuthUser
from noteful.utils.logging import get_logger
from noteful.utils.validation import parse_uuid

if TYPE_CHECKING:
    from noteful.core.models.user import User
    from noteful.core.repositories.user_repository import UserRepository


logger = get_logger(__name__)

password_hasher = PasswordHash.recommended()


class AuthService:
    """Credential checks and bearer token issuance/verification.

    Tokens are HS256 JWTs whose ``sub`` is the user id and whose ``user``
    claim carries the public profile, so verifying a token needs no store
    round-trip.
    """

    def __init__(
        self,
        users: UserRepository,
        *,
        secret: str,
        algorithm: str = "HS256",
        expiry_seconds: int = 7 * 24 * 60 * 60,
    ) -> None:
        self._users = users
        self._secret = secret
        self._algorithm = algorithm
        self._expiry = timedelta(seconds=expiry_seconds)

    async def sign_in(self, username: str, password: str) -> str:
        """Check credentials and return a fresh token."""
        user = await self._users.get_by_username(username)
        if user is None:
            logger.warning("Sign in failed", extra={"username": username, "reason": "unknown user"})
            raise AuthenticationError()

        valid = await asyncio.to_thread(password_hasher.verify, password, user.password_hash)
        if not valid:
            logger.warning("Sign in failed", extra={"username": username, "reason": "bad password"})
            raise AuthenticationError()

        logger.info("User signed in successfully", extra={"user_id": str(user.id)})
        return self.issue_token(user)

    def refresh(self, current_user: AuthUser) -> str:
        """Issue a new token for an already verified identity."""
        return self._encode(current_user)

    def issue_token(self, user: User | AuthUser) -> str:
        return self._encode(AuthUser(id=user.id, username=user.username, fullname=user.fullname))

    def verify_token(self, token: str) -> AuthUser:
        """Decode a bearer token into the identity it was issued for."""
        try:
            payload: dict[str, Any] = jwt.decode(token, key=self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as err:
            raise AuthenticationError("Token is expired") from err
        except jwt.InvalidTokenError as err:
            raise AuthenticationError("Token decode error") from err

        claims = payload.get("user") or {}
        user_id = parse_uuid(payload.get("sub"))
        username = claims.get("username")
        if user_id is None or not username:
            raise AuthenticationError("Invalid token payload")
        return AuthUser(id=user_id, username=username, fullname=claims.get("fullname"))

    def _encode(self, identity: AuthUser) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(identity.id),
            "user": identity.model_dump(mode="json"),
            "iat": now,
            "exp": now + self._expiry,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)
