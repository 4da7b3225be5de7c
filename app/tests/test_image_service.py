# tests/test_image_service.py
import pytest

from app.services.image_service import ImageService
from app.services.recipe_service import RecipeService


@pytest.mark.asyncio
async def test_no_key_returns_placeholder(patch_httpx_get):
    svc = ImageService(access_key="")
    assert await svc.find_image("soup") == "/placeholder.svg"
    assert "last" not in patch_httpx_get


@pytest.mark.asyncio
async def test_find_image_from_list_payload(patch_httpx_get):
    svc = ImageService(access_key="abc")
    url = await svc.find_image("Carrot Soup")
    assert url == "https://images.unsplash.com/a.jpg"
    call = patch_httpx_get["last"]
    assert call["params"] == {"query": "Carrot Soup", "count": 1, "orientation": "squarish"}
    assert call["headers"] == {"Authorization": "Client-ID abc"}


@pytest.mark.asyncio
async def test_find_image_from_single_payload(patch_httpx_get):
    patch_httpx_get["payload"] = {"urls": {"regular": "https://images.unsplash.com/b.jpg"}}
    assert await ImageService(access_key="abc").find_image("x") == "https://images.unsplash.com/b.jpg"


@pytest.mark.asyncio
async def test_http_error_falls_back(patch_httpx_get):
    patch_httpx_get["status"] = 403
    assert await ImageService(access_key="abc").find_image("x") == "/placeholder.svg"


@pytest.mark.asyncio
async def test_odd_payload_falls_back(patch_httpx_get):
    patch_httpx_get["payload"] = []
    assert await ImageService(access_key="abc").find_image("x") == "/placeholder.svg"


@pytest.mark.asyncio
async def test_backfill_replaces_example_com_images(fake_db, recipes, patch_httpx_get):
    recipes[0]["image"] = "https://images.example.com/pasta.jpg"
    fake_db.seed(recipes)
    store = RecipeService(client=fake_db)

    res = await ImageService(access_key="abc").backfill_placeholder_images(store)

    assert res["ok"] is True
    assert res["data"] == ["1"]
    assert res["diagnostics"]["candidates"] == 1
    updated = await store.get_recipe("1")
    assert updated["data"]["image"] == "https://images.unsplash.com/a.jpg"
    untouched = await store.get_recipe("2")
    assert untouched["data"]["image"] == "/pasta.jpg"
