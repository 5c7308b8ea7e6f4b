"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Runtime
    environment: str = "development"
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["*"]

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"
    mongo_db_name: str = "recipes_db"

    # Redis (shared token revocation store)
    redis_host: str = "redis"
    redis_port: int = 6379
    revocation_use_redis: bool = True

    # JWT Configuration (PEM encoded RSA keys)
    jwt_private_key: str = ""
    jwt_public_key: str = ""
    jwt_algorithm: str = "RS256"
    access_token_life_seconds: int = 3600

    # Registration. The role comes from the register body, so any caller may
    # create an admin while this is on.
    allow_admin_self_registration: bool = True

    # Webhooks
    webhook_timeout_seconds: float = 10.0

    # Pagination
    default_per_page: int = 20

    # Recipe seeding
    recipe_source_url: str = "https://api.api-ninjas.com/v1"
    recipe_source_api_key: Optional[str] = None
    seed_keywords: list[str] = ["muffin"]
    seed_batch_size: int = 10
    seed_limit: int = 100
    seed_owner_username: str = "admin"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def private_key_pem(self) -> str:
        """Private key with escaped newlines expanded (env files keep PEMs on one line)."""
        return self.jwt_private_key.replace("\\n", "\n")

    @property
    def public_key_pem(self) -> str:
        return self.jwt_public_key.replace("\\n", "\n")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
