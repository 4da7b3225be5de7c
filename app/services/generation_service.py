# app/services/generation_service.py
"""
Recipe generation through an external generative model.

Design goals:
- The model is an interface: prompt in, schema-validated recipe dicts out,
  `ModelError` on any network, response, JSON or schema problem.
- Blocking SDK calls run in a threadpool; no automatic retries, the error is
  surfaced to the caller with diagnostic detail.
- Persistence of generated recipes is best-effort: insert failures are logged
  and the generated content is still returned.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from app.config.settings import settings
from app.models.recipe import RECIPE_JSON_SCHEMA, Recipe
from app.services.image_service import ImageService
from app.services.recipe_filters import ingredient_names
from app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


class ModelError(Exception):
    """The generative model call failed or returned unusable output."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail or message


def _mask_key(k: Optional[str]) -> str:
    if not k:
        return "(none)"
    if len(k) <= 8:
        return k
    return f"{k[:4]}...{k[-4:]}"


# -----------------------
# Prompt construction
# -----------------------
def extract_ingredient_names(docs: List[Dict[str, Any]]) -> List[str]:
    """Distinct ingredient names across all documents, in first-seen order."""
    seen: Dict[str, None] = {}
    for doc in docs:
        for name in ingredient_names(doc.get("ingredients")):
            seen.setdefault(name, None)
    return list(seen)


def extract_existing_titles(docs: List[Dict[str, Any]]) -> List[str]:
    return [d["title"] for d in docs if d.get("title")]


def build_generation_prompt(
    ingredients: List[str], existing_titles: List[str], n: int = 1
) -> str:
    noun = "recipe" if n == 1 else "recipes"
    return "\n\n".join(
        [
            "You are a recipe generation engine.",
            f"We provide the following available ingredients :\n{json.dumps(ingredients)}",
            "We already have these recipes in our dataset (do not duplicate or produce near-identical recipes):",
            json.dumps(existing_titles),
            f"Please generate exactly {n} new, distinct {noun} that can be prepared using some subset of the available ingredients.",
            "Each returned item must strictly follow the provided JSON schema named 'Recipe' (fields, types), and must include realistic quantities, servings, cook/prep times, difficulty (easy|medium|hard), dietary tags where applicable, and nutritionPerServing.",
            "Return the result as a JSON array of Recipe objects (no extra text).",
        ]
    )


def coerce_to_list(parsed: Any) -> List[Dict[str, Any]]:
    """A single object becomes a one-item list; `{"recipes": [...]}` is unwrapped."""
    if isinstance(parsed, dict) and isinstance(parsed.get("recipes"), list):
        parsed = parsed["recipes"]
    if isinstance(parsed, list):
        return [p for p in parsed if isinstance(p, dict)]
    if isinstance(parsed, dict):
        return [parsed]
    return []


def validate_generated(items: List[Dict[str, Any]]) -> None:
    """Raise ModelError if any item does not fit the Recipe shape."""
    for idx, item in enumerate(items):
        try:
            Recipe.model_validate(dict(item, id=str(item.get("id") or "pending")))
        except ValidationError as exc:
            raise ModelError(
                "Model output does not match the Recipe schema",
                detail=f"item {idx}: {exc}",
            ) from exc


def validation_summary(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {"_raw": p, "ok": bool(p.get("title")) and isinstance(p.get("ingredients"), list)}
        for p in items
    ]


# -----------------------
# Model interface
# -----------------------
class RecipeGenerator:
    """Prompt in, list of Recipe-shaped dicts out."""

    async def generate(self, prompt: str, n: int = 1) -> List[Dict[str, Any]]:
        raise NotImplementedError


class OpenAIRecipeGenerator(RecipeGenerator):

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self.client: Optional[OpenAI] = None
        if self.api_key:
            try:
                self.client = OpenAI(
                    api_key=self.api_key,
                    base_url=base_url or settings.openai_base_url,
                    timeout=timeout or settings.model_timeout_seconds,
                    max_retries=0,
                )
                logger.info("OpenAI client created (model=%s)", self.model)
            except Exception as exc:
                logger.exception("Failed creating OpenAI client: %s", exc)
                self.client = None
        else:
            logger.info("OpenAI client not configured; generation disabled.")

    def _system_message(self) -> str:
        return (
            "You produce recipes as JSON only. Reply with a JSON object of the form "
            '{"recipes": [Recipe, ...]} where each Recipe follows this JSON schema:\n'
            + json.dumps(RECIPE_JSON_SCHEMA)
        )

    async def generate(self, prompt: str, n: int = 1) -> List[Dict[str, Any]]:
        if self.client is None:
            raise ModelError("Missing OPENAI_API_KEY env var")

        loop = asyncio.get_running_loop()
        func = lambda: self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self._system_message()},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )
        try:
            resp = await loop.run_in_executor(None, func)
        except OpenAIError as exc:
            logger.error(
                "OpenAI call failed: %s (key=%s)", exc, _mask_key(self.api_key)
            )
            raise ModelError("Model call failed", detail=str(exc)) from exc

        try:
            content = resp.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise ModelError("Unexpected model response shape", detail=str(resp)[:400]) from exc
        if not content:
            raise ModelError("Model returned empty content")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ModelError("Model returned malformed JSON", detail=str(exc)) from exc

        items = coerce_to_list(parsed)
        validate_generated(items)
        return items


# -----------------------
# Orchestration
# -----------------------
class GenerationService:

    def __init__(
        self,
        recipe_service: Optional[RecipeService] = None,
        generator: Optional[RecipeGenerator] = None,
        image_service: Optional[ImageService] = None,
    ):
        self.recipe_service = recipe_service or RecipeService()
        self.generator = generator or OpenAIRecipeGenerator()
        self.image_service = image_service or ImageService()

    async def generate(
        self, docs: List[Dict[str, Any]], n: int = 1
    ) -> Dict[str, Any]:
        """
        Generate `n` recipes that do not duplicate `docs`, persist them and
        return {"recipes": [...], "validationSummary": [...]}.

        Raises ModelError when the model call or its output is unusable.
        """
        prompt = build_generation_prompt(
            extract_ingredient_names(docs), extract_existing_titles(docs), n
        )
        items = await self.generator.generate(prompt, n)
        logger.info("Model returned %d recipe(s)", len(items))

        summary = validation_summary(items)
        if not items:
            return {"recipes": [], "validationSummary": summary}

        recipes = await self._assign_ids(items)
        if recipes is None:
            return {"recipes": items, "validationSummary": summary}

        for doc in recipes:
            if not doc.get("image"):
                doc["image"] = await self.image_service.find_image(
                    doc.get("title") or "food"
                )

        inserted = await self.recipe_service.insert_many(recipes)
        if inserted["ok"]:
            logger.info(
                "Inserted generated recipes: %s",
                inserted["diagnostics"].get("insert_count"),
            )
        else:
            logger.error(
                "Failed to insert generated recipes into DB: %s %s",
                inserted.get("error"),
                inserted.get("diagnostics"),
            )
        return {"recipes": recipes, "validationSummary": summary}

    async def _assign_ids(
        self, items: List[Dict[str, Any]]
    ) -> Optional[List[Dict[str, Any]]]:
        allocated = await self.recipe_service.allocate_ids(len(items))
        if not allocated["ok"]:
            logger.error(
                "Could not allocate ids for generated recipes: %s %s",
                allocated.get("error"),
                allocated.get("diagnostics"),
            )
            return None

        recipes = []
        for item, new_id in zip(items, allocated["data"]):
            doc = {k: v for k, v in item.items() if k not in ("id", "_id")}
            doc["id"] = new_id
            recipes.append(doc)
        return recipes
