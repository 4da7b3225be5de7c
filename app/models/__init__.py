"""Pydantic models for recipes and recipe API payloads."""
from app.models.recipe import (
    DIETARY_TAGS,
    DIFFICULTIES,
    Ingredient,
    NutritionPerServing,
    Ratings,
    Recipe,
)
from app.models.filters import (
    FilterBundle,
    GenerateRequest,
    SearchRequest,
)

# Export all models
__all__ = [
    "DIETARY_TAGS",
    "DIFFICULTIES",
    "Ingredient",
    "NutritionPerServing",
    "Ratings",
    "Recipe",
    "FilterBundle",
    "GenerateRequest",
    "SearchRequest",
]
