"""
Data access layer.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from recipe_api.database.databases import recipes_db
from recipe_api.models.recipe import Recipe
from recipe_api.models.user import User
from recipe_api.repositories.base import MongoRepository, Page


def user_repository(db: AsyncIOMotorDatabase) -> MongoRepository[User]:
    """Repository for users, keyed by username."""
    return MongoRepository(
        db[recipes_db.Collections.USERS],
        User,
        natural_key="username",
        search_fields=("username", "email"),
    )


def recipe_repository(db: AsyncIOMotorDatabase) -> MongoRepository[Recipe]:
    """Repository for recipes, keyed by title and searchable by title or category."""
    return MongoRepository(
        db[recipes_db.Collections.RECIPES],
        Recipe,
        natural_key="title",
        search_fields=("title", "category"),
    )


__all__ = [
    "MongoRepository",
    "Page",
    "user_repository",
    "recipe_repository",
]
