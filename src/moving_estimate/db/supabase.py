"""Supabase client for reference data and estimate request storage."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning(
            "Supabase credentials not configured (MOVING_SUPABASE_URL / MOVING_SUPABASE_KEY); "
            "reference data comes from the workbook and estimate requests cannot be stored"
        )
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client for estimate storage: {e}")
        return None
