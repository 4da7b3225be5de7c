# app/services/search_service.py
"""
Recipe search: run the full collection through every filter predicate and,
when nothing matches and the caller opts in, fall back to generation.

- Read-all, filter-in-memory; input order is preserved, no ranking.
- A non-empty result never touches the generative model.
- Store failures come back as result dicts; ModelError propagates.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.models.filters import FilterBundle, SearchRequest
from app.services.generation_service import GenerationService
from app.services.recipe_filters import recipe_matches
from app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


def filter_recipes(
    recipes: List[Dict[str, Any]],
    terms: Optional[List[str]] = None,
    filters: Optional[FilterBundle] = None,
) -> List[Dict[str, Any]]:
    """Subset of `recipes` passing every matcher, in input order."""
    terms = terms or []
    filters = filters or FilterBundle()
    return [r for r in recipes if recipe_matches(r, terms, filters)]


class SearchService:

    def __init__(
        self,
        recipe_service: Optional[RecipeService] = None,
        generation_service: Optional[GenerationService] = None,
    ):
        self.recipe_service = recipe_service or RecipeService()
        self._generation_service = generation_service

    @property
    def generation_service(self) -> GenerationService:
        # built lazily so plain searches never construct a model client
        if self._generation_service is None:
            self._generation_service = GenerationService(self.recipe_service)
        return self._generation_service

    async def search(self, request: SearchRequest) -> Dict[str, Any]:
        """
        Returns:
            {"ok": True, "data": {"recipes": [...]} | {"recipes", "validationSummary"},
             "diagnostics": {...}}
            {"ok": False, "error": "...", "diagnostics": {...}} on store failure

        Raises:
            ModelError: generation fallback failed.
        """
        logger.info(
            "Search request: terms=%s filters=%s generateIfEmpty=%s",
            request.terms,
            request.filters.model_dump(),
            request.generateIfEmpty,
        )
        fetched = await self.recipe_service.fetch_all()
        if not fetched["ok"]:
            return fetched

        docs = fetched["data"]
        results = filter_recipes(docs, request.terms, request.filters)
        diagnostics = {"fetched_count": len(docs), "matched_count": len(results)}

        if results or not request.generateIfEmpty:
            return {"ok": True, "data": {"recipes": results}, "diagnostics": diagnostics}

        logger.info("No matching recipes found. Generating new recipes...")
        generated = await self.generation_service.generate(docs, 1)
        diagnostics["generated_count"] = len(generated["recipes"])
        return {"ok": True, "data": generated, "diagnostics": diagnostics}
