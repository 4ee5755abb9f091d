from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from noteful.core.errors import DuplicateKeyError
from noteful.core.models.user import User
from noteful.utils.logging import get_logger

from .auth_service import password_hasher

if TYPE_CHECKING:
    from noteful.api.v1.schemas.user import UserCreate
    from noteful.core.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class UserService:
    """Registration of new accounts."""

    def __init__(self, repo: UserRepository) -> None:
        self._repo = repo

    async def create_user(self, payload: UserCreate) -> User:
        """Hash the password and store the user; a taken username is a conflict."""
        digest = await asyncio.to_thread(password_hasher.hash, payload.password)
        user = User(
            username=payload.username,
            password_hash=digest,
            fullname=payload.fullname,
        )
        try:
            created = await self._repo.create(user)
        except DuplicateKeyError as err:
            raise DuplicateKeyError("The username already exists", table="users") from err

        logger.info("User signed up successfully", extra={"user_id": str(created.id)})
        return created

    async def ping(self) -> None:
        """Ping the store; used by the readiness check."""
        await self._repo.ping()
