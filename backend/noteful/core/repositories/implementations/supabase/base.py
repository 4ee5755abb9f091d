from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, ClassVar

from postgrest.exceptions import APIError

from noteful.core.errors import DuplicateKeyError, StoreError
from noteful.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from supabase import Client

logger = get_logger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseRepository:
    """Shared plumbing for the PostgREST-backed repositories.

    Runs the blocking client in a worker thread and translates client errors
    into the domain vocabulary: unique violations become ``DuplicateKeyError``,
    everything else ``StoreError``.
    """

    TABLE_NAME: ClassVar[str]

    def __init__(self, client: Client) -> None:
        self._client: Client = client

    def _table(self):
        return self._client.table(self.TABLE_NAME)

    async def _run(self, func: Callable[[], Any], *, operation: str) -> Any:
        try:
            return await asyncio.to_thread(func)
        except APIError as err:
            if err.code == UNIQUE_VIOLATION:
                raise DuplicateKeyError(table=self.TABLE_NAME) from err
            logger.error(
                "Store request failed",
                extra={"table": self.TABLE_NAME, "operation": operation, "code": err.code},
            )
            raise StoreError(
                f"Failed to {operation} {self.TABLE_NAME}", operation=operation, original_error=err
            ) from err
        except Exception as err:
            logger.error(
                "Store unreachable",
                extra={"table": self.TABLE_NAME, "operation": operation, "error": str(err)[:100]},
            )
            raise StoreError(
                f"Failed to {operation} {self.TABLE_NAME}", operation=operation, original_error=err
            ) from err

    @staticmethod
    def _first(data: Any) -> dict[str, Any] | None:
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        return None
