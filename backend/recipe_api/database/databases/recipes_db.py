"""
Recipes database configuration.
Stores user accounts and recipe records.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class Collections:
    """Collection names in recipes_db."""
    USERS = "users"
    RECIPES = "recipes"

    # Index definitions for each collection
    INDEXES = {
        "users": [
            {"keys": [("username", 1)], "unique": True},
            {"keys": [("email", 1)], "unique": True},
        ],
        "recipes": [
            {"keys": [("title", 1)], "unique": True},
            {"keys": [("category", 1)]},
            {"keys": [("owner_id", 1)]},
        ],
    }


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for recipes database collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)
    logger.info("Indexes ensured for %s", ", ".join(Collections.INDEXES))
