# app/api/recipes.py
"""
Recipe endpoints: search (with generation fallback), explicit generation,
detail fetch and serving-scaled detail.

- Request bodies are parsed leniently; malformed fields fall back to
  neutral values.
- A missing store is a fixed 500 "Database not initialized" per request.
- Model failures are a 502 with diagnostic detail.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.db.client import DATABASE_NOT_INITIALIZED
from app.models.filters import GenerateRequest, SearchRequest
from app.models.recipe import Recipe
from app.services.generation_service import GenerationService, ModelError
from app.services.recipe_service import DATABASE_UNAVAILABLE, RecipeService
from app.services.search_service import SearchService
from app.services.serving_scaler import DISPLAY_MODES, ServingScaler

logger = logging.getLogger(__name__)
router = APIRouter()


# -------------------------
# Dependencies (singletons, overridable in tests)
# -------------------------
@lru_cache(maxsize=1)
def get_recipe_service() -> RecipeService:
    return RecipeService()


@lru_cache(maxsize=1)
def get_generation_service() -> GenerationService:
    return GenerationService(get_recipe_service())


def get_search_service(
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> SearchService:
    # generation is resolved lazily, only for an empty result
    return SearchService(recipe_service)


# -------------------------
# Helpers
# -------------------------
async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except Exception:
        logger.debug("Request body is not JSON; using defaults")
        return {}


def _store_error(result: Dict[str, Any], message: str) -> JSONResponse:
    if result.get("error") == DATABASE_UNAVAILABLE:
        return JSONResponse({"error": DATABASE_NOT_INITIALIZED}, status_code=500)
    logger.error("%s: %s %s", message, result.get("error"), result.get("diagnostics"))
    return JSONResponse({"error": message}, status_code=500)


def _model_error(exc: ModelError) -> JSONResponse:
    logger.error("Model call failed: %s (%s)", exc, exc.detail)
    return JSONResponse(
        {"error": "Model call failed", "detail": str(exc.detail)}, status_code=502
    )


async def _load_recipe(recipe_service: RecipeService, recipe_id: str):
    """Returns (Recipe, None) or (None, error response)."""
    if not recipe_id:
        return None, JSONResponse({"error": "Missing id parameter"}, status_code=400)

    result = await recipe_service.get_recipe(recipe_id)
    if not result["ok"]:
        return None, _store_error(result, "Failed to fetch recipe")
    doc = result["data"]
    if doc is None:
        return None, JSONResponse({"error": "Recipe not found"}, status_code=404)

    try:
        return Recipe.model_validate(doc), None
    except ValidationError as exc:
        logger.error("Stored recipe %s does not match expected shape: %s", recipe_id, exc)
        return None, JSONResponse(
            {"error": "Invalid recipe data", "detail": str(exc)},
            status_code=422,
        )


# -------------------------
# Routes
# -------------------------
@router.post("/recipes/search")
@router.post("/recipes")
async def search_recipes(
    request: Request, search_service: SearchService = Depends(get_search_service)
):
    payload = SearchRequest.from_payload(await _json_body(request))
    try:
        result = await search_service.search(payload)
    except ModelError as exc:
        return _model_error(exc)
    if not result["ok"]:
        return _store_error(result, "Failed to fetch recipes")
    return result["data"]


@router.post("/generate-recipes")
async def generate_recipes(
    request: Request,
    recipe_service: RecipeService = Depends(get_recipe_service),
    generation_service: GenerationService = Depends(get_generation_service),
):
    payload = GenerateRequest.from_payload(await _json_body(request))
    fetched = await recipe_service.fetch_all()
    if not fetched["ok"]:
        return _store_error(fetched, "Failed to generate recipes")
    try:
        return await generation_service.generate(fetched["data"], payload.n)
    except ModelError as exc:
        return _model_error(exc)


@router.get("/recipes/{recipe_id}")
async def get_recipe(
    recipe_id: str, recipe_service: RecipeService = Depends(get_recipe_service)
):
    logger.info("Fetching recipe with id: %s", recipe_id)
    recipe, error = await _load_recipe(recipe_service, recipe_id)
    if error is not None:
        return error
    return {"recipe": recipe.model_dump(exclude_none=True)}


@router.get("/recipes/{recipe_id}/scaled")
async def get_scaled_recipe(
    recipe_id: str,
    servings: Optional[str] = Query(default=None),
    mode: str = Query(default="per"),
    recipe_service: RecipeService = Depends(get_recipe_service),
):
    recipe, error = await _load_recipe(recipe_service, recipe_id)
    if error is not None:
        return error

    scaler = ServingScaler(recipe, mode=mode if mode in DISPLAY_MODES else "per")
    if servings is not None:
        scaler.set_servings_from_input(servings)
    return {"recipe": recipe.model_dump(exclude_none=True), "scaled": scaler.to_dict()}
