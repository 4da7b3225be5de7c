"""
Recipe model for validating recipe documents at the service boundary.
"""
from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard"]
DietaryTag = Literal[
    "vegetarian",
    "vegan",
    "gluten-free",
    "dairy-free",
    "nut-free",
    "halal",
    "kosher",
]

DIFFICULTIES = get_args(Difficulty)
DIETARY_TAGS = get_args(DietaryTag)


class Ingredient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    quantity: float
    unit: str
    optional: Optional[bool] = None
    substitutes: Optional[List[str]] = None


class NutritionPerServing(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)


class Ratings(BaseModel):
    avg: float
    count: float


class Recipe(BaseModel):
    """A single dish: metadata, ingredients, instructions and per-serving nutrition."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: str
    image: str
    cuisine: str
    ingredients: List[Ingredient]
    instructions: List[str]
    servings: int = Field(ge=1)
    cookTimeMinutes: float
    prepTimeMinutes: Optional[float] = None
    difficulty: Difficulty
    dietary: List[DietaryTag]
    nutritionPerServing: NutritionPerServing
    ratings: Optional[Ratings] = None
    tags: Optional[List[str]] = None

    def __repr__(self):
        return f"<Recipe(id='{self.id}', title='{self.title}', cuisine='{self.cuisine}')>"


# JSON schema handed to the generative model. Mirrors Recipe without `id`,
# which is assigned at insert time.
RECIPE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "image": {"type": "string"},
        "cuisine": {"type": "string"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number"},
                    "unit": {"type": "string"},
                    "substitutes": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["name", "quantity", "unit"],
            },
        },
        "instructions": {"type": "array", "items": {"type": "string"}},
        "servings": {"type": "number"},
        "cookTimeMinutes": {"type": "number"},
        "prepTimeMinutes": {"type": "number"},
        "difficulty": {"type": "string", "enum": list(DIFFICULTIES)},
        "dietary": {
            "type": "array",
            "items": {"type": "string", "enum": list(DIETARY_TAGS)},
        },
        "nutritionPerServing": {
            "type": "object",
            "properties": {
                "calories": {"type": "number"},
                "protein": {"type": "number"},
                "fat": {"type": "number"},
                "carbs": {"type": "number"},
            },
            "required": ["calories", "protein", "fat", "carbs"],
        },
        "ratings": {
            "type": "object",
            "properties": {
                "avg": {"type": "number"},
                "count": {"type": "number"},
            },
            "required": ["avg", "count"],
        },
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "required": [
        "title",
        "description",
        "image",
        "cuisine",
        "ingredients",
        "instructions",
        "servings",
        "cookTimeMinutes",
        "difficulty",
        "dietary",
        "nutritionPerServing",
    ],
}
