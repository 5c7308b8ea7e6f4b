"""
Pydantic models for database documents and data structures.
"""
from recipe_api.models.user import User, UserRole
from recipe_api.models.recipe import Recipe, DEFAULT_CATEGORY
from recipe_api.models.principal import Principal

__all__ = [
    "User",
    "UserRole",
    "Recipe",
    "DEFAULT_CATEGORY",
    "Principal",
]
