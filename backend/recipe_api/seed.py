#!/usr/bin/env python3
"""
Recipe seeding script

Fetches recipes from an api-ninjas compatible recipe API, categorizes them
by title and stores them owned by an existing admin user.

Usage:
    recipe-api-seed [owner_username]

Environment Variables:
    MONGO_URI: MongoDB connection string
    RECIPE_SOURCE_URL: Recipe API base URL
    RECIPE_SOURCE_API_KEY: API key sent as X-Api-Key
    SEED_KEYWORDS: JSON list of search keywords (default: ["muffin"])
    SEED_BATCH_SIZE: Recipes kept per keyword (default: 10)
    SEED_LIMIT: Total recipes to fetch (default: 100)
    SEED_OWNER_USERNAME: Owner of the seeded recipes (default: admin)
"""
import asyncio
import logging
import re
import sys
from typing import Any, Iterable, Optional

import httpx

from recipe_api.config import Settings, get_settings
from recipe_api.container import build_services
from recipe_api.core.logging import configure_logging
from recipe_api.database.connections import close_connections, get_database
from recipe_api.database.databases.recipes_db import create_indexes
from recipe_api.errors import ValidationError
from recipe_api.models.principal import Principal
from recipe_api.models.recipe import DEFAULT_CATEGORY
from recipe_api.models.user import UserRole
from recipe_api.services.recipe_service import RecipeService

logger = logging.getLogger("recipe_seed")


# ==================== Categorization ====================

# First matching category wins, in this order
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Seafood": ["salmon", "fish", "shrimp", "seafood", "gravlax"],
    "Vegetarian": ["vegetarian", "vegan", "tofu", "plant-based"],
    "Dessert": ["cake", "dessert", "sweet", "chocolate", "muffin"],
    "Breakfast": ["breakfast", "pancake", "waffle", "brunch"],
    "Pasta": ["pasta", "spaghetti", "lasagna", "noodle"],
    "Chicken": ["chicken", "poultry", "turkey", "duck"],
    "Beef": ["beef", "steak", "burger", "meatball"],
    "Pork": ["pork", "bacon", "ham", "sausage"],
    "Soup": ["soup", "stew", "chowder", "bisque"],
}

_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def categorize_title(title: str) -> str:
    """Category of a recipe title, or ``Uncategorized``."""
    lowered = title.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def categorize_recipes(recipes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Assign a category to every recipe that has none."""
    for recipe in recipes:
        if not recipe.get("category"):
            recipe["category"] = categorize_title(recipe["title"])
    return recipes


def normalize_external_recipe(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Convert a recipe from the source API into a recipe payload.

    The source sends ingredients as one ``|``-separated string and the
    instructions as a paragraph; both become lists.
    """
    ingredients = raw.get("ingredients") or ""
    if isinstance(ingredients, str):
        ingredients = ingredients.split("|")

    instructions = raw.get("instructions") or ""
    if isinstance(instructions, str):
        instructions = _SENTENCE_END.split(instructions.strip())

    return {
        "title": (raw.get("title") or "").strip(),
        "ingredients": [i.strip() for i in ingredients if i and i.strip()],
        "servings": str(raw.get("servings") or "").strip(),
        "instructions": [s.strip() for s in instructions if s and s.strip()],
    }


# ==================== Recipe Source Client ====================

class RecipeSourceClient:
    """Async client for the external recipe API."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=30.0, follow_redirects=True)
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def search(self, keyword: str) -> list[dict[str, Any]]:
        """Fetch recipes matching a keyword."""
        client = await self._get_client()
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key

        try:
            response = await client.get(
                f"{self.base_url}/recipe",
                params={"query": keyword, "offset": 0},
                headers=headers,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching recipes for '{keyword}': {e}")
            raise


async def fetch_recipes(
    source: RecipeSourceClient,
    keywords: Iterable[str],
    batch_size: int = 10,
    limit: int = 100,
) -> list[dict[str, Any]]:
    """
    Fetch up to ``batch_size`` recipes per keyword, stopping once ``limit``
    recipes have been collected.
    """
    recipes: list[dict[str, Any]] = []
    for keyword in keywords:
        fetched = await source.search(keyword)
        if not fetched:
            logger.info(f"No recipes found for '{keyword}'")
            continue

        recipes.extend(fetched[:batch_size])
        if len(recipes) >= limit:
            break

    recipes = recipes[:limit]
    logger.info(f"Fetched {len(recipes)} recipes in total")
    return recipes


# ==================== Seeding ====================

async def seed_recipes(
    recipe_service: RecipeService,
    owner: Principal,
    recipes: Iterable[dict[str, Any]],
) -> int:
    """
    Store recipes owned by ``owner``. No webhook is sent.

    Recipes that fail validation or whose title already exists are skipped.

    Returns:
        Number of recipes inserted
    """
    payloads = [
        {**normalize_external_recipe(raw), "category": raw.get("category")}
        for raw in recipes
    ]

    inserted = 0
    for payload in categorize_recipes(payloads):
        payload["owner_id"] = owner.id

        try:
            await recipe_service.entities.insert(payload)
        except ValidationError as e:
            logger.warning(f"Skipped recipe '{payload['title']}': {e.message}")
            continue
        inserted += 1

    logger.info(f"Seeded {inserted} recipes")
    return inserted


async def run_seed(settings: Settings, owner_username: str) -> int:
    """Fetch and store recipes for ``owner_username``."""
    db = await get_database(settings)
    await create_indexes(db)
    services = build_services(settings, db)
    source = RecipeSourceClient(settings.recipe_source_url, settings.recipe_source_api_key)

    try:
        user = await services.credentials.users.get_by_key(owner_username)
        if user is None or user.role != UserRole.ADMIN:
            raise ValidationError(f"Seed owner '{owner_username}' must be an existing admin.")

        recipes = await fetch_recipes(
            source,
            settings.seed_keywords,
            batch_size=settings.seed_batch_size,
            limit=settings.seed_limit,
        )
        return await seed_recipes(services.recipes, Principal.from_user(user), recipes)
    finally:
        await source.close()
        await services.close()
        await close_connections()


# ==================== Main Entry Point ====================

def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)
    owner = sys.argv[1] if len(sys.argv) > 1 else settings.seed_owner_username

    logger.info("=" * 60)
    logger.info("Recipe seeding")
    logger.info(f"Keywords: {', '.join(settings.seed_keywords)}")
    logger.info(f"Owner: {owner}")
    logger.info("=" * 60)

    try:
        asyncio.run(run_seed(settings, owner))
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
