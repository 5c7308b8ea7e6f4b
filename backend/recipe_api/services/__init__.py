"""
Service layer for business logic.
"""
from recipe_api.services.base import EntityService
from recipe_api.services.credential_service import CredentialService
from recipe_api.services.recipe_service import RecipeService
from recipe_api.services.user_service import UserService
from recipe_api.services.webhook_dispatcher import WebhookDispatcher

__all__ = [
    "EntityService",
    "CredentialService",
    "RecipeService",
    "UserService",
    "WebhookDispatcher",
]
