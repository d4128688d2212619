"""Supabase client for the order backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings
from ..errors import StoreUnavailableError


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        return client
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def require_client() -> Client:
    """Return the Supabase client or raise when the store is not configured."""
    client = get_supabase_client()
    if client is None:
        raise StoreUnavailableError(
            "Supabase not configured. Set WHEATFLOW_SUPABASE_URL and WHEATFLOW_SUPABASE_KEY environment variables."
        )
    return client
