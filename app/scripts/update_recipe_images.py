#!/usr/bin/env python3
"""
Replace stand-in recipe images (example.com URLs) with Unsplash photos.

Usage:
  UNSPLASH_ACCESS_KEY=... python -m app.scripts.update_recipe_images
"""
import asyncio
import logging
import sys

from app.services.image_service import ImageService
from app.services.recipe_service import RecipeService

logger = logging.getLogger("update_recipe_images")


async def main() -> int:
    images = ImageService()
    if not images.access_key:
        logger.error("Missing Unsplash API access key. Set UNSPLASH_ACCESS_KEY in your .env file.")
        return 1

    logger.info("Fetching recipes with placeholder images...")
    res = await images.backfill_placeholder_images(RecipeService())
    if not res["ok"]:
        logger.error("Error updating recipe images: %s %s", res.get("error"), res.get("diagnostics"))
        return 1
    logger.info("Image update process completed: updated=%d %s", len(res["data"]), res["diagnostics"])
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(main()))
