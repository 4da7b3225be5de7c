#!/usr/bin/env python3
"""
Insert the bundled starter catalog into the recipes table (idempotent by title).

Usage:
  python -m app.scripts.seed_recipes
"""
import asyncio
import logging
import sys

from app.data.seed_recipes import SEED_RECIPES
from app.services.recipe_service import RecipeService

logger = logging.getLogger("seed_recipes")


async def main() -> int:
    svc = RecipeService()
    res = await svc.populate_seed_recipes(SEED_RECIPES)
    if not res["ok"]:
        logger.error("Seeding failed: %s %s", res.get("error"), res.get("diagnostics"))
        return 1
    logger.info("Seeded %d recipe(s) %s", len(res["data"]), res["diagnostics"])
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(main()))
