"""
Database module - MongoDB and Redis connections and database definitions.
"""
from recipe_api.database.connections import (
    get_mongo_client,
    get_redis_client,
    close_connections,
    get_database,
)
from recipe_api.database.databases import recipes_db

__all__ = [
    "get_mongo_client",
    "get_redis_client",
    "close_connections",
    "get_database",
    "recipes_db",
]
