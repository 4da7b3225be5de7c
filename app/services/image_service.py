# app/services/image_service.py
"""
Recipe image lookup using the Unsplash random-photo API.

Goals:
- Use httpx.AsyncClient for lookups (async).
- Best-effort: any failure (missing key, network, odd payload) yields the
  configured placeholder path instead of raising.
- Use logging instead of prints.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config.settings import settings

logger = logging.getLogger(__name__)

# Seed data shipped with example.com stand-in images
PLACEHOLDER_MARKER = "example.com"


def _extract_url(data: Any) -> Optional[str]:
    """Pull `urls.regular` out of a list or single-photo Unsplash payload."""
    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict):
        return None
    urls = data.get("urls")
    if isinstance(urls, dict) and urls.get("regular"):
        return str(urls["regular"])
    return None


class ImageService:
    def __init__(
        self,
        access_key: Optional[str] = None,
        api_url: Optional[str] = None,
        placeholder: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        self.access_key = access_key if access_key is not None else settings.unsplash_access_key
        self.api_url = api_url or settings.unsplash_api_url
        self.placeholder = placeholder or settings.placeholder_image
        self.timeout = timeout
        if not self.access_key:
            logger.warning(
                "ImageService: Unsplash access key missing; lookups return %s",
                self.placeholder,
            )

    async def find_image(self, query: str) -> str:
        """Return an image URL for `query`, or the placeholder on any failure."""
        if not self.access_key:
            return self.placeholder

        params = {"query": query or "food", "count": 1, "orientation": "squarish"}
        headers = {"Authorization": f"Client-ID {self.access_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.api_url, params=params, headers=headers)
                resp.raise_for_status()
                url = _extract_url(resp.json())
        except Exception as exc:
            logger.error("Failed to fetch image from Unsplash for %r: %s", query, exc)
            return self.placeholder

        if not url:
            logger.warning("Unsplash returned no usable image for %r", query)
            return self.placeholder
        return url

    async def backfill_placeholder_images(self, recipe_service) -> Dict[str, Any]:
        """
        Replace stand-in images (URLs containing example.com) on stored recipes.

        Returns {'ok', 'data': [updated ids], 'diagnostics': {...}}.
        """
        fetched = await recipe_service.fetch_all()
        if not fetched["ok"]:
            return fetched

        targets = [
            d for d in fetched["data"] if PLACEHOLDER_MARKER in str(d.get("image") or "")
        ]
        diag: Dict[str, Any] = {"candidates": len(targets)}
        if not targets:
            logger.info("No recipes with placeholder images found.")
            return {"ok": True, "data": [], "diagnostics": diag}

        updated: List[str] = []
        failed: List[str] = []
        for doc in targets:
            new_image = await self.find_image(doc.get("title") or "food")
            if not new_image or new_image == self.placeholder:
                failed.append(doc["id"])
                continue
            res = await recipe_service.update_image(doc, new_image)
            if res["ok"]:
                logger.info("Updated recipe %r with new image.", doc.get("title"))
                updated.append(doc["id"])
            else:
                failed.append(doc["id"])

        diag["failed"] = failed
        return {"ok": True, "data": updated, "diagnostics": diag}
