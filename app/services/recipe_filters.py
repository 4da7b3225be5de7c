# app/services/recipe_filters.py
"""
Pure predicates that evaluate one recipe document against one filter dimension.

Every matcher works on plain values pulled from a stored document, so legacy
documents (string ingredient lists, top-level `calories`) filter the same way
as current ones. `recipe_matches` is the conjunction used by the search
aggregator.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.models.filters import FilterBundle


def _safe_list(x: Optional[Any]) -> List[Any]:
    if not x:
        return []
    if isinstance(x, list):
        return x
    if isinstance(x, (tuple, set)):
        return list(x)
    return [x]


def ingredient_names(ingredients: Any) -> List[str]:
    """Names from an ingredient list holding strings or `{name, ...}` objects."""
    names: List[str] = []
    for ing in _safe_list(ingredients):
        if not ing:
            continue
        if isinstance(ing, str):
            names.append(ing)
        elif isinstance(ing, dict):
            if ing.get("name"):
                names.append(str(ing["name"]))
            else:
                # first plausible string value
                possible = next((v for v in ing.values() if isinstance(v, str)), None)
                if possible:
                    names.append(possible)
    return names


def searchable_text(recipe: Dict[str, Any]) -> str:
    """Title, description and flattened ingredient names, lower-cased."""
    parts = [
        str(recipe.get("title") or ""),
        str(recipe.get("description") or ""),
        " ".join(ingredient_names(recipe.get("ingredients"))),
    ]
    return " ".join(parts).lower()


def recipe_calories(recipe: Dict[str, Any]) -> float:
    nutrition = recipe.get("nutritionPerServing")
    value = None
    if isinstance(nutrition, dict):
        value = nutrition.get("calories")
    if value is None:
        value = recipe.get("calories")
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def parse_bound(raw: Optional[str]) -> Optional[float]:
    """Parse a calorie bound; absent, empty, unparsable or non-finite means unconstrained."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


# -----------------------
# Matchers
# -----------------------
def matches_terms(text: str, terms: Sequence[str]) -> bool:
    if not terms:
        return True
    hay = text.lower()
    return all(str(t).lower() in hay for t in terms)


def matches_time(minutes: float, bucket: str) -> bool:
    if bucket == "<15":
        return minutes < 15
    if bucket == "15-30":
        return 15 <= minutes <= 30
    if bucket == "30-60":
        return 30 < minutes <= 60
    if bucket == ">60":
        return minutes > 60
    return True


def matches_difficulty(difficulty: str, want: str) -> bool:
    return True if want == "any" else difficulty == want


def matches_dietary(recipe_tags: Iterable[str], want: Sequence[str]) -> bool:
    if not want:
        return True
    tags = set(recipe_tags)
    return all(tag in tags for tag in want)


def matches_calories(
    calories: float, min_raw: Optional[str] = None, max_raw: Optional[str] = None
) -> bool:
    lo = parse_bound(min_raw)
    hi = parse_bound(max_raw)
    if lo is not None and calories < lo:
        return False
    if hi is not None and calories > hi:
        return False
    return True


def matches_cuisine(cuisine: str, selected: Sequence[str]) -> bool:
    if not selected:
        return True
    return cuisine in selected


def recipe_matches(
    recipe: Dict[str, Any], terms: Sequence[str], filters: FilterBundle
) -> bool:
    """True iff the recipe passes every dimension (logical AND)."""
    try:
        minutes = float(recipe.get("cookTimeMinutes") or 0)
    except (TypeError, ValueError):
        minutes = 0.0
    return (
        matches_terms(searchable_text(recipe), terms)
        and matches_time(minutes, filters.time)
        and matches_difficulty(recipe.get("difficulty") or "any", filters.difficulty)
        and matches_dietary(
            [str(t) for t in _safe_list(recipe.get("dietary"))], filters.dietary
        )
        and matches_calories(
            recipe_calories(recipe), filters.caloriesMin, filters.caloriesMax
        )
        and matches_cuisine(recipe.get("cuisine") or "", filters.cuisines)
    )
