# app/tests/helpers.py
"""In-memory stand-ins shared by the test modules."""
import copy
from types import SimpleNamespace
from typing import Any, Dict, List

import httpx

from app.services.generation_service import RecipeGenerator


# ---------------------------------------------------------------------
# Recipe documents
# ---------------------------------------------------------------------
def make_recipe(**overrides) -> Dict[str, Any]:
    doc = {
        "id": "1",
        "title": "Pasta Aglio e Olio",
        "description": "Classic Italian pasta with garlic and olive oil.",
        "image": "/pasta.jpg",
        "cuisine": "Italian",
        "ingredients": [
            {"name": "spaghetti", "quantity": 200, "unit": "g"},
            {"name": "garlic", "quantity": 4, "unit": "cloves"},
            {"name": "olive oil", "quantity": 4, "unit": "tbsp"},
        ],
        "instructions": ["Boil pasta.", "Fry garlic.", "Toss."],
        "servings": 2,
        "cookTimeMinutes": 20,
        "difficulty": "easy",
        "dietary": ["vegetarian", "nut-free"],
        "nutritionPerServing": {"calories": 480, "protein": 14, "fat": 20, "carbs": 62},
    }
    doc.update(overrides)
    return doc


# ---------------------------------------------------------------------
# Small in-memory FakeDB and FakeTable (chainable, PostgREST-like)
# ---------------------------------------------------------------------
class FakeTable:

    def __init__(self, db, name):
        self.db = db
        self.name = name
        self._where = {}
        self._operation = None
        self._limit = None
        self._count = None
        self._order = None
        self._range = None

    def select(self, *args, count=None, **kwargs):
        self._count = count
        return self

    def eq(self, col, val):
        self._where[col] = val
        return self

    def limit(self, n):
        self._limit = n
        return self

    def order(self, col, desc=False):
        self._order = (col, desc)
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def insert(self, payload):
        self._operation = ("insert", payload)
        return self

    def update(self, payload):
        self._operation = ("update", payload)
        return self

    def _matching(self):
        rows = []
        for r in self.db.tables.get(self.name, []):
            if all(str(r.get(k)) == str(v) for k, v in self._where.items()):
                rows.append(r)
        return rows

    def execute(self):
        if self.db.fail_on and self.db.fail_on == (self._operation or ("select",))[0]:
            raise RuntimeError(f"fake {self.db.fail_on} failure")
        op = self._operation
        if not op:
            self.db.select_calls += 1
            rows = self._matching()
            if self._order:
                col, desc = self._order
                rows = sorted(rows, key=lambda r: str(r.get(col)), reverse=desc)
            if self._range:
                start, end = self._range
                rows = rows[start : end + 1]
            if self._limit:
                rows = rows[: self._limit]
            total = len(self.db.tables.get(self.name, [])) if self._count else None
            return SimpleNamespace(data=copy.deepcopy(rows), count=total)
        typ, payload = op
        if typ == "insert":
            rows = payload if isinstance(payload, list) else [payload]
            self.db.tables.setdefault(self.name, []).extend(copy.deepcopy(rows))
            return SimpleNamespace(data=rows, count=None)
        if typ == "update":
            updated = []
            for r in self._matching():
                r.update(copy.deepcopy(payload))
                updated.append(r)
            return SimpleNamespace(data=updated, count=None)
        return SimpleNamespace(data=[], count=None)


class FakeDB:

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.counter = 0
        self.fail_on = None
        self.rpc_calls = []
        self.select_calls = 0

    def table(self, name):
        return FakeTable(self, name)

    def rpc(self, name, params=None):
        self.rpc_calls.append((name, params))
        batch = (params or {}).get("batch", 1)
        self.counter += batch
        first = self.counter - batch + 1
        return SimpleNamespace(execute=lambda: SimpleNamespace(data=first))

    def seed(self, docs, table="recipes"):
        self.tables.setdefault(table, []).extend(
            {"id": d["id"], "title": d.get("title"), "doc": copy.deepcopy(d)} for d in docs
        )


# ---------------------------------------------------------------------
# Generative model and image collaborators
# ---------------------------------------------------------------------
class FakeGenerator(RecipeGenerator):

    def __init__(self, items=None, error=None):
        self.items = items if items is not None else []
        self.error = error
        self.calls = []

    async def generate(self, prompt, n=1):
        self.calls.append((prompt, n))
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.items)


class DummyChoice:

    def __init__(self, content):
        self.message = SimpleNamespace(content=content)


class DummyOpenAI:
    """Stands in for openai.OpenAI; `content` or `error` set per test."""

    content = "{}"
    error = None
    last_kwargs = None

    def __init__(self, **kwargs):
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, *args, **kwargs):
        DummyOpenAI.last_kwargs = kwargs
        if DummyOpenAI.error is not None:
            raise DummyOpenAI.error
        return SimpleNamespace(choices=[DummyChoice(DummyOpenAI.content)])


# --- Unsplash responses ---
class FakeResp:

    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                "error",
                request=httpx.Request("GET", "https://api.unsplash.com/photos/random"),
                response=httpx.Response(self.status_code),
            )
        return None

    def json(self):
        return self._payload


