# app/services/recipe_service.py
"""
Recipe store operations using Supabase.

- Consistent return shape: {'ok': bool, 'data': ..., 'diagnostics': {...}}
  so higher-level services can rely on predictable structures.
- Blocking supabase calls run in a threadpool to keep the event loop free.
- Rows are `{id, title, doc}` where `doc` is the full recipe document;
  documents are normalized on the way out (legacy ids, string ingredients,
  top-level calories).
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from app.config.settings import settings
from app.db.client import SupabaseClientNotInitialized, get_supabase_client

logger = logging.getLogger(__name__)

DATABASE_UNAVAILABLE = "database_not_initialized"


def _response_data(resp: Any) -> List[Dict[str, Any]]:
    data = getattr(resp, "data", None)
    if data is None and isinstance(resp, dict):
        data = resp.get("data")
    if data is None:
        return []
    return data if isinstance(data, list) else [data]


def normalize_document(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a stored row into a recipe document.

    Accepts `{id, doc}` rows and flat legacy rows. A document missing its
    string `id` is backfilled from the row id or the legacy `_id`.
    """
    if isinstance(row.get("doc"), dict):
        doc = dict(row["doc"])
        if row.get("id") is not None and doc.get("id") in (None, ""):
            doc["id"] = row["id"]
    else:
        doc = dict(row)

    legacy_id = doc.pop("_id", None)
    if doc.get("id") in (None, "") and legacy_id not in (None, ""):
        doc["id"] = legacy_id
    if doc.get("id") is not None:
        doc["id"] = str(doc["id"])

    ingredients = doc.get("ingredients")
    if isinstance(ingredients, list) and any(isinstance(i, str) for i in ingredients):
        doc["ingredients"] = [
            {"name": i, "quantity": 1, "unit": ""} if isinstance(i, str) else i
            for i in ingredients
        ]

    if not isinstance(doc.get("nutritionPerServing"), dict) and "calories" in doc:
        doc["nutritionPerServing"] = {
            "calories": doc.get("calories") or 0,
            "protein": 0,
            "fat": 0,
            "carbs": 0,
        }
    return doc


def to_row(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": str(doc["id"]), "title": doc.get("title"), "doc": doc}


class RecipeService:

    def __init__(
        self,
        client: Any = None,
        table: Optional[str] = None,
        page_size: Optional[int] = None,
    ):
        self._client = client
        self.table = table or settings.recipes_table
        self.page_size = page_size or settings.fetch_page_size

    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                self._client = get_supabase_client()
            except SupabaseClientNotInitialized:
                return None
        return self._client

    # -----------------------
    # Internal helpers
    # -----------------------
    async def _exec_in_thread(self, fn, *args, **kwargs):
        """Run a blocking supabase call in a threadpool and return its result."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: fn(*args, **kwargs))

    def _ok_result(
        self, data: Any, diagnostics: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return {"ok": True, "data": data, "diagnostics": diagnostics or {}}

    def _error_result(
        self, err: str, diagnostics: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return {"ok": False, "error": err, "diagnostics": diagnostics or {}}

    # -----------------------
    # Public API
    # -----------------------
    async def fetch_all(self) -> Dict[str, Any]:
        """
        Read every recipe document (read-all, filter-in-memory).

        Pages through the table ordered by id until a short page comes back,
        so the server-side row cap never truncates the catalog.
        """
        client = self.client
        if client is None:
            return self._error_result(DATABASE_UNAVAILABLE)

        docs: List[Dict[str, Any]] = []
        start = 0
        pages = 0
        try:
            while True:
                end = start + self.page_size - 1
                resp = await self._exec_in_thread(
                    client.table(self.table)
                    .select("*")
                    .order("id")
                    .range(start, end)
                    .execute
                )
                rows = _response_data(resp)
                pages += 1
                docs.extend(normalize_document(r) for r in rows if r)
                if len(rows) < self.page_size:
                    break
                start += self.page_size
            return self._ok_result(docs, {"count": len(docs), "pages": pages})
        except Exception as exc:
            logger.exception("fetch_all failed: %s", exc)
            return self._error_result("query_failed", {"exception": str(exc)})

    async def get_recipe(self, recipe_id: str) -> Dict[str, Any]:
        """Fetch one document by id; data is None when absent."""
        client = self.client
        if client is None:
            return self._error_result(DATABASE_UNAVAILABLE)

        try:
            resp = await self._exec_in_thread(
                client.table(self.table)
                .select("*")
                .eq("id", str(recipe_id))
                .limit(1)
                .execute
            )
            rows = _response_data(resp)
            doc = normalize_document(rows[0]) if rows else None
            return self._ok_result(doc, {"id": recipe_id, "found": doc is not None})
        except Exception as exc:
            logger.exception("get_recipe failed: %s", exc)
            return self._error_result(
                "query_failed", {"exception": str(exc), "id": recipe_id}
            )

    async def count(self) -> Dict[str, Any]:
        client = self.client
        if client is None:
            return self._error_result(DATABASE_UNAVAILABLE)

        try:
            resp = await self._exec_in_thread(
                client.table(self.table).select("id", count="exact").execute
            )
            total = getattr(resp, "count", None)
            if total is None:
                total = len(_response_data(resp))
            return self._ok_result(int(total))
        except Exception as exc:
            logger.exception("count failed: %s", exc)
            return self._error_result("count_failed", {"exception": str(exc)})

    async def allocate_ids(self, n: int) -> Dict[str, Any]:
        """
        Reserve `n` sequential string ids.

        "count" strategy: collection size + 1 onwards (races under concurrent
        generation). "counter" strategy: the `next_recipe_id(batch)` RPC
        returns the first id of an atomically reserved block.
        """
        if n <= 0:
            return self._ok_result([])
        client = self.client
        if client is None:
            return self._error_result(DATABASE_UNAVAILABLE)

        if settings.recipe_id_strategy == "counter":
            try:
                resp = await self._exec_in_thread(
                    client.rpc("next_recipe_id", {"batch": n}).execute
                )
                data = getattr(resp, "data", None)
                if isinstance(data, list):
                    data = data[0] if data else None
                if isinstance(data, dict):
                    data = next(iter(data.values()), None)
                start = int(data)
            except Exception as exc:
                logger.exception("next_recipe_id RPC failed: %s", exc)
                return self._error_result("counter_failed", {"exception": str(exc)})
            return self._ok_result(
                [str(start + i) for i in range(n)], {"strategy": "counter"}
            )

        counted = await self.count()
        if not counted["ok"]:
            return counted
        start = counted["data"] + 1
        return self._ok_result(
            [str(start + i) for i in range(n)], {"strategy": "count"}
        )

    async def insert_many(self, docs: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Insert recipe documents; each must already carry its string id."""
        client = self.client
        if client is None:
            return self._error_result(DATABASE_UNAVAILABLE)
        if not docs:
            return self._ok_result([], {"insert_count": 0})

        try:
            resp = await self._exec_in_thread(
                client.table(self.table).insert([to_row(d) for d in docs]).execute
            )
            inserted = _response_data(resp)
            return self._ok_result(inserted, {"insert_count": len(inserted)})
        except Exception as exc:
            logger.exception("insert_many failed: %s", exc)
            return self._error_result("insert_failed", {"exception": str(exc)})

    async def update_image(self, doc: Dict[str, Any], image: str) -> Dict[str, Any]:
        client = self.client
        if client is None:
            return self._error_result(DATABASE_UNAVAILABLE)

        updated = dict(doc, image=image)
        try:
            await self._exec_in_thread(
                client.table(self.table)
                .update({"doc": updated})
                .eq("id", str(doc["id"]))
                .execute
            )
            return self._ok_result(updated)
        except Exception as exc:
            logger.exception("update_image failed for id=%s: %s", doc.get("id"), exc)
            return self._error_result("update_failed", {"exception": str(exc)})

    # -----------------------
    # Utility: bulk populate
    # -----------------------
    async def populate_seed_recipes(
        self, seed: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Insert seed recipes whose titles are not stored yet (idempotent)."""
        existing = await self.fetch_all()
        if not existing["ok"]:
            return existing

        existing_titles = {d.get("title") for d in existing["data"] if d.get("title")}
        new_docs = [dict(d) for d in seed if d.get("title") not in existing_titles]
        if not new_docs:
            return self._ok_result(
                [],
                {"message": "no_new_recipes", "existing_count": len(existing_titles)},
            )

        missing_ids = [d for d in new_docs if not d.get("id")]
        if missing_ids:
            allocated = await self.allocate_ids(len(missing_ids))
            if not allocated["ok"]:
                return allocated
            for doc, new_id in zip(missing_ids, allocated["data"]):
                doc["id"] = new_id

        return await self.insert_many(new_docs)
