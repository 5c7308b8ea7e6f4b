"""
Process-wide MongoDB and Redis clients.

Clients are created on first use from the application settings and shared
by every request; ``close_connections`` releases both at shutdown.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from redis.asyncio import Redis

from recipe_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

_mongo_client: Optional[AsyncIOMotorClient] = None
_redis_client: Optional[Redis] = None


async def get_mongo_client(settings: Optional[Settings] = None) -> AsyncIOMotorClient:
    """Get or create the MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        settings = settings or get_settings()
        _mongo_client = AsyncIOMotorClient(settings.mongo_uri, uuidRepresentation="standard")
        logger.info("MongoDB client created for %s", settings.mongo_db_name)
    return _mongo_client


async def get_redis_client(settings: Optional[Settings] = None) -> Optional[Redis]:
    """
    Get or create the Redis client backing token revocation.

    Returns None when revocation is configured to stay in process.
    """
    global _redis_client
    settings = settings or get_settings()
    if not settings.revocation_use_redis:
        return None

    if _redis_client is None:
        _redis_client = Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            decode_responses=True,
        )
        logger.info("Redis client created for %s:%s", settings.redis_host, settings.redis_port)
    return _redis_client


async def get_database(settings: Optional[Settings] = None) -> AsyncIOMotorDatabase:
    """Get the recipes database."""
    settings = settings or get_settings()
    client = await get_mongo_client(settings)
    return client[settings.mongo_db_name]


async def close_connections() -> None:
    """Close all database connections."""
    global _mongo_client, _redis_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
