from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from smart_todo.config import settings
from smart_todo.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Return a cached Supabase client using the anon key.

    The todo list is single-user, so one client is shared across requests.
    """
    logger.debug("Initializing Supabase client")
    anon_key = settings.supabase_anon_key
    if not anon_key:
        raise RuntimeError("supabase_anon_key is required for the Supabase client")

    return create_client(
        settings.supabase_url,
        anon_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
