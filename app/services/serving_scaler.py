# app/services/serving_scaler.py
"""
Serving-size scaling for the recipe detail view.

Quantities scale linearly with the requested serving count and are shown as
whole numbers when they land on one, otherwise with up to two decimals.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.models.recipe import Recipe

DISPLAY_MODES = ("per", "total")

_INT_TOLERANCE = 1e-6


def format_quantity(n: float) -> str:
    """'6' for 6.0000001, '0.33' for 1/3, '1.5' for 1.50."""
    if abs(n - round(n)) < _INT_TOLERANCE:
        return str(int(round(n)))
    text = f"{n:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def clamp_servings(s: Any) -> int:
    try:
        value = int(s)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, value)


def effective_base(b: Optional[float]) -> float:
    """Base servings, with absent or zero treated as 1."""
    return b if b else 1


def parse_servings_input(text: Any) -> int:
    """Digits typed into the servings box; empty or zero falls back to 1."""
    digits = re.sub(r"[^0-9]", "", str(text or ""))
    return clamp_servings(int(digits) if digits else 1)


def scale_quantity(quantity: float, base: Optional[float], requested: Any) -> float:
    return quantity * (clamp_servings(requested) / effective_base(base))


@dataclass
class ServingScaler:
    """Detail-view state: the recipe, requested servings and display mode."""

    recipe: Recipe
    servings: Optional[int] = None
    mode: str = "per"
    _base: float = field(init=False, repr=False, default=1)

    def __post_init__(self):
        self._base = effective_base(self.recipe.servings)
        self.servings = clamp_servings(
            self.servings if self.servings is not None else self._base
        )
        if self.mode not in DISPLAY_MODES:
            self.mode = "per"

    def set_servings(self, value: Any) -> int:
        self.servings = clamp_servings(value)
        return self.servings

    def set_servings_from_input(self, text: Any) -> int:
        self.servings = parse_servings_input(text)
        return self.servings

    def increment(self) -> int:
        self.servings += 1
        return self.servings

    def decrement(self) -> int:
        self.servings = max(1, self.servings - 1)
        return self.servings

    def ingredient_rows(self) -> List[Dict[str, Any]]:
        rows = []
        for ing in self.recipe.ingredients:
            scaled = scale_quantity(ing.quantity, self._base, self.servings)
            rows.append(
                {
                    "name": ing.name,
                    "quantity": scaled,
                    "display": format_quantity(scaled),
                    "unit": ing.unit,
                    "optional": bool(ing.optional),
                    "substitutes": list(ing.substitutes or []),
                }
            )
        return rows

    def nutrition_totals(self) -> Dict[str, float]:
        per = self.recipe.nutritionPerServing
        return {
            "calories": per.calories * self.servings,
            "protein": per.protein * self.servings,
            "fat": per.fat * self.servings,
            "carbs": per.carbs * self.servings,
        }

    def display_calories(self) -> float:
        per = self.recipe.nutritionPerServing.calories
        return per if self.mode == "per" else per * self.servings

    def to_dict(self) -> Dict[str, Any]:
        totals = self.nutrition_totals()
        return {
            "baseServings": self._base,
            "servings": self.servings,
            "mode": self.mode,
            "ingredients": self.ingredient_rows(),
            "nutritionPerServing": self.recipe.nutritionPerServing.model_dump(),
            "nutritionTotals": totals,
            "nutritionTotalsDisplay": {k: format_quantity(v) for k, v in totals.items()},
            "calories": format_quantity(self.display_calories()),
        }
