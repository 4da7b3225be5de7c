# app/tests/conftest.py
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from unittest.mock import AsyncMock

import app.config.settings as settings_mod
from app.tests.helpers import DummyOpenAI, FakeDB, FakeResp, make_recipe


@pytest.fixture(autouse=True)
def patch_settings(monkeypatch):
    """
    Provide sane defaults for settings used by services.
    Tests can override attributes with monkeypatch as needed.
    """
    s = settings_mod.settings
    monkeypatch.setattr(s, "openai_api_key", None)
    monkeypatch.setattr(s, "unsplash_access_key", None)
    monkeypatch.setattr(s, "recipes_table", "recipes")
    monkeypatch.setattr(s, "recipe_id_strategy", "count")
    monkeypatch.setattr(s, "placeholder_image", "/placeholder.svg")
    return s


@pytest.fixture
def recipes() -> List[Dict[str, Any]]:
    return [
        make_recipe(),
        make_recipe(
            id="2",
            title="Thai Green Curry",
            description="Fragrant coconut curry.",
            cuisine="Thai",
            ingredients=[
                {"name": "coconut milk", "quantity": 400, "unit": "ml"},
                {"name": "tofu", "quantity": 200, "unit": "g"},
            ],
            servings=3,
            cookTimeMinutes=35,
            difficulty="medium",
            dietary=["vegan", "vegetarian", "gluten-free"],
            nutritionPerServing={"calories": 410, "protein": 13, "fat": 30, "carbs": 20},
        ),
        make_recipe(
            id="3",
            title="Beef Bourguignon",
            description="Slow-braised beef in red wine.",
            cuisine="French",
            ingredients=[
                {"name": "beef chuck", "quantity": 1, "unit": "kg"},
                {"name": "red wine", "quantity": 750, "unit": "ml"},
            ],
            servings=6,
            cookTimeMinutes=180,
            difficulty="hard",
            dietary=["dairy-free"],
            nutritionPerServing={"calories": 690, "protein": 52, "fat": 38, "carbs": 12},
        ),
    ]


@pytest.fixture
def fake_db():
    return FakeDB()


@pytest.fixture
def seeded_db(fake_db, recipes):
    fake_db.seed(recipes)
    return fake_db


@pytest.fixture
def fake_supabase_client(monkeypatch, fake_db):
    fake = SimpleNamespace(client=fake_db, health_check=lambda: True)
    monkeypatch.setattr("app.config.supabase.supabase_client", fake)
    return fake


@pytest.fixture
def no_supabase_client(monkeypatch):
    fake = SimpleNamespace(client=None, health_check=lambda: False)
    monkeypatch.setattr("app.config.supabase.supabase_client", fake)
    return fake


@pytest.fixture
def generated_recipe():
    doc = make_recipe(
        title="Garlic Tofu Stir Fry",
        description="Quick tofu with garlic.",
        image="",
        cuisine="Chinese",
    )
    doc.pop("id")
    doc["_id"] = "model-made-this-up"
    return doc


@pytest.fixture
def fake_images():
    return SimpleNamespace(
        find_image=AsyncMock(return_value="https://images.unsplash.com/tofu.jpg"),
        placeholder="/placeholder.svg",
    )


@pytest.fixture
def fake_openai(monkeypatch):
    DummyOpenAI.content = "{}"
    DummyOpenAI.error = None
    DummyOpenAI.last_kwargs = None
    monkeypatch.setattr("app.services.generation_service.OpenAI", DummyOpenAI)
    return DummyOpenAI


@pytest.fixture
def patch_httpx_get(monkeypatch):
    state = {"payload": [{"urls": {"regular": "https://images.unsplash.com/a.jpg"}}], "status": 200}

    async def _fake_get(self, url, params=None, headers=None, **kwargs):
        state["last"] = {"url": url, "params": params, "headers": headers}
        return FakeResp(state["payload"], state["status"])

    monkeypatch.setattr("httpx.AsyncClient.get", _fake_get)
    return state
