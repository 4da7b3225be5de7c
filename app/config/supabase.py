# app/config/supabase.py
"""
Supabase client for the recipe store.

The client is created on first use rather than at import, so a process
without credentials still starts and every store-backed endpoint answers
"Database not initialized". `health_check()` is synchronous; main runs it
in the threadpool with a timeout.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from urllib.parse import urlparse

from supabase import create_client, Client  # supabase-py
from app.config.settings import settings

logger = logging.getLogger(__name__)

_HOSTED_URL_RE = re.compile(r"^https://[A-Za-z0-9\-]+\.supabase\.co/?$")
# local stack (`supabase start`) or a self-hosted gateway
_SELF_HOSTED_URL_RE = re.compile(r"^https?://[A-Za-z0-9\-\.]+(:\d+)?/?$")


def is_valid_supabase_url(url: Optional[str]) -> bool:
    if not url:
        return False
    return bool(_HOSTED_URL_RE.match(url) or _SELF_HOSTED_URL_RE.match(url))


def create_store_client(url: Optional[str], key: Optional[str]) -> Optional[Client]:
    """Build a supabase-py client, or None when config is missing or unusable."""
    url = (url or "").strip()
    if not url or not key:
        logger.warning(
            "Supabase credentials missing (url=%r, key_present=%s); recipe store disabled.",
            url,
            bool(key),
        )
        return None
    if not is_valid_supabase_url(url):
        logger.error("Supabase URL format invalid: %r", url)
        return None
    try:
        client = create_client(url, key)
    except Exception as exc:
        logger.exception("Failed to initialize Supabase client: %s", exc)
        return None
    logger.info("Initialized Supabase client for host=%s", urlparse(url).netloc)
    return client


class SupabaseClient:
    """
    Lazily-built store client.

    Use:
        from app.config.supabase import supabase_client
        client = supabase_client.client  # None if not configured
    """

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        table: Optional[str] = None,
    ) -> None:
        self.url = url if url is not None else settings.supabase_url
        self.key = key if key is not None else settings.supabase_service_role_key
        self._table = table
        self._client: Optional[Client] = None
        self._attempted = False

    @property
    def table(self) -> str:
        return self._table or settings.recipes_table

    @property
    def client(self) -> Optional[Client]:
        if not self._attempted:
            self._attempted = True
            self._client = create_store_client(self.url, self.key)
        return self._client

    def health_check(self) -> bool:
        """One-row select on the recipes table; any error counts as unhealthy."""
        client = self.client
        if client is None:
            return False

        try:
            res = client.table(self.table).select("id").limit(1).execute()
        except Exception as exc:
            logger.exception("Exception during Supabase health_check: %s", exc)
            return False

        error = getattr(res, "error", None)
        if error:
            logger.warning("Supabase health_check returned error object: %s", error)
            return False
        status = getattr(res, "status_code", None)
        if isinstance(status, int) and status >= 400:
            logger.warning("Supabase health_check HTTP status: %s", status)
            return False
        return True


supabase_client = SupabaseClient()
