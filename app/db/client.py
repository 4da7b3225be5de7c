# app/db/client.py
"""
Supabase client accessor.

Keep this file strictly focused on returning the global Supabase client
(built on first use in app.config.supabase). Fail fast so API endpoints
can translate a missing store into the fixed "Database not initialized" error.

Usage:
    from app.db.client import get_supabase_client

    client = get_supabase_client()
"""
import logging
from typing import Any

from app.config import supabase as supabase_config

logger = logging.getLogger(__name__)

DATABASE_NOT_INITIALIZED = "Database not initialized"


class SupabaseClientNotInitialized(RuntimeError):
    """Raised when the supabase client is not available at runtime."""

    def __init__(self, msg: str = DATABASE_NOT_INITIALIZED):
        super().__init__(msg)


def get_supabase_client() -> Any:
    """
    Return the initialized Supabase client.

    Raises:
        SupabaseClientNotInitialized: if the supabase client is not available.
    """
    client = getattr(supabase_config.supabase_client, "client", None)

    if client is None:
        logger.error(
            "Supabase client is not initialized. Check SUPABASE_URL / "
            "SUPABASE_SERVICE_ROLE_KEY and the logs of app.config.supabase."
        )
        raise SupabaseClientNotInitialized()

    if not hasattr(client, "table"):
        logger.warning(
            "Supabase client exists but has no 'table' attribute. "
            "This may indicate a custom wrapper or a different client library."
        )

    return client

