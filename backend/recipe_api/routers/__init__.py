"""
API Routers module.
"""
from recipe_api.routers import health, recipes, users

__all__ = ["health", "recipes", "users"]
