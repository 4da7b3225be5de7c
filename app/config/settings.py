# app/config/settings.py
"""
Application configuration using pydantic-settings (pydantic v2 style).

This centralizes environment-driven configuration. Prefer reading values
from environment variables; do not rely on os.getenv inline defaults which
can silently hide missing configuration.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application configuration loaded from environment.

    Relevant environment variables:
      - SUPABASE_URL
      - SUPABASE_SERVICE_ROLE_KEY
      - RECIPES_TABLE
      - RECIPE_ID_STRATEGY
      - FETCH_PAGE_SIZE
      - OPENAI_API_KEY
      - OPENAI_MODEL
      - OPENAI_BASE_URL
      - MAX_GENERATE
      - UNSPLASH_ACCESS_KEY
      - CORS_ORIGINS
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Supabase
    supabase_url: Optional[str] = Field(default=None)
    supabase_service_role_key: Optional[str] = Field(default=None)
    recipes_table: str = Field(default="recipes")
    # "count" -> collection size + 1, "counter" -> next_recipe_id() RPC
    recipe_id_strategy: str = Field(default="count")
    # PostgREST caps a single response (1000 rows by default); reads page at this size
    fetch_page_size: int = Field(default=1000, ge=1)

    # OpenAI (or any OpenAI-compatible endpoint)
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini")
    openai_base_url: Optional[str] = Field(default=None)
    model_timeout_seconds: float = Field(default=60.0)
    # upper bound on recipes per generation request
    max_generate: int = Field(default=5, ge=1)

    # Unsplash image search
    unsplash_access_key: Optional[str] = Field(default=None)
    unsplash_api_url: str = Field(default="https://api.unsplash.com/photos/random")
    placeholder_image: str = Field(default="/placeholder.svg")

    # HTTP
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )
    health_check_timeout: float = Field(default=5.0)
    fail_on_db_startup: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    # --- validators / post-init checks ---
    @field_validator("supabase_url", "supabase_service_role_key", "openai_api_key")
    @classmethod
    def maybe_strip(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip()

    @field_validator("recipe_id_strategy")
    @classmethod
    def check_id_strategy(cls, v: str) -> str:
        v = (v or "count").strip().lower()
        if v not in ("count", "counter"):
            raise ValueError("RECIPE_ID_STRATEGY must be 'count' or 'counter'")
        return v

    def model_post_init(self, __context) -> None:  # pydantic v2 hooks
        """
        Light-weight validation/notice that runs after model is constructed.
        Uses logging (not print) so messages show up in server logs.
        """
        if not self.supabase_url or not self.supabase_service_role_key:
            logger.warning(
                "Supabase credentials are not configured. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY to enable DB features."
            )
        if not self.openai_api_key:
            logger.info(
                "OPENAI_API_KEY not set. Recipe generation will be unavailable."
            )
        if not self.unsplash_access_key:
            logger.info(
                "UNSPLASH_ACCESS_KEY not set. Generated recipes will use %s.",
                self.placeholder_image,
            )


# single exporter
settings = Settings()
