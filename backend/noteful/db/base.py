from __future__ import annotations

from typing import TYPE_CHECKING

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from noteful.utils.logging import get_logger

if TYPE_CHECKING:
    from noteful.config import Settings

logger = get_logger(__name__)


def create_store_client(settings: Settings) -> Client:
    """Create the process-wide Supabase client using the service role key.

    Ownership is enforced by the services (every query is scoped by
    ``user_id``), so the API talks to PostgREST with elevated privileges and
    issues its own tokens instead of relying on Supabase Auth sessions.
    """
    logger.debug("Initializing Supabase client")
    if not settings.supabase_service_role_key:
        raise RuntimeError("supabase_service_role_key is required for the store client")
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
