"""
Composition root.

Builds every service once at startup; request handlers receive them from
``app.state.services``.
"""
from dataclasses import dataclass
from typing import Optional

import httpx
from motor.motor_asyncio import AsyncIOMotorDatabase
from redis.asyncio import Redis

from recipe_api.config import Settings
from recipe_api.core.revocation import RevokedTokenSet, TokenRevocationStore
from recipe_api.repositories import recipe_repository, user_repository
from recipe_api.services.base import EntityService
from recipe_api.services.credential_service import CredentialService
from recipe_api.services.recipe_service import RecipeService
from recipe_api.services.user_service import UserService
from recipe_api.services.webhook_dispatcher import WebhookDispatcher


@dataclass
class Services:
    """Singleton services shared by all requests."""
    settings: Settings
    db: AsyncIOMotorDatabase
    credentials: CredentialService
    users: UserService
    recipes: RecipeService
    dispatcher: WebhookDispatcher
    redis: Optional[Redis] = None

    async def close(self) -> None:
        await self.dispatcher.close()


def build_services(
    settings: Settings,
    db: AsyncIOMotorDatabase,
    redis: Optional[Redis] = None,
    webhook_client: Optional[httpx.AsyncClient] = None,
) -> Services:
    """
    Wire repositories, services and the webhook dispatcher.

    Args:
        settings: Application settings
        db: The recipes database
        redis: Shared revocation store; None keeps revocation in process
        webhook_client: Optional HTTP client for outbound webhooks
    """
    users_repo = user_repository(db)
    revocations = TokenRevocationStore(local=RevokedTokenSet(), redis=redis)

    credentials = CredentialService(
        users=users_repo,
        revocations=revocations,
        private_key=settings.private_key_pem,
        public_key=settings.public_key_pem,
        algorithm=settings.jwt_algorithm,
        token_life_seconds=settings.access_token_life_seconds,
    )
    dispatcher = WebhookDispatcher(timeout=settings.webhook_timeout_seconds, client=webhook_client)

    return Services(
        settings=settings,
        db=db,
        credentials=credentials,
        users=UserService(EntityService(users_repo, "user"), credentials),
        recipes=RecipeService(EntityService(recipe_repository(db), "recipe"), dispatcher),
        dispatcher=dispatcher,
        redis=redis,
    )
