"""
Recipe service: generic recipe CRUD plus search and the creation webhook.
"""
import logging
from dataclasses import dataclass
from typing import Any

from recipe_api.errors import WebhookError, handle_error
from recipe_api.models.principal import Principal
from recipe_api.models.recipe import Recipe
from recipe_api.schemas.recipe import WebhookDelivery
from recipe_api.services.base import EntityService
from recipe_api.services.webhook_dispatcher import WebhookDispatcher

logger = logging.getLogger(__name__)


@dataclass
class RecipeCreation:
    """A stored recipe and what happened to its webhook."""
    recipe: Recipe
    webhook: WebhookDelivery


def webhook_payload(recipe: Recipe) -> dict[str, Any]:
    """Notification payload describing a newly created recipe."""
    return {
        "recipeId": recipe.id,
        "title": recipe.title,
        "servings": recipe.servings,
        "category": recipe.category,
        "ingredients": recipe.ingredients,
        "instructions": recipe.instructions,
    }


def _root_cause(error: BaseException) -> BaseException:
    while getattr(error, "cause", None) is not None:
        error = error.cause
    return error


class RecipeService:
    """Service for recipe operations."""

    def __init__(self, entities: EntityService[Recipe], dispatcher: WebhookDispatcher):
        self.entities = entities
        self.dispatcher = dispatcher

    async def create(self, payload: dict, principal: Principal) -> RecipeCreation:
        """
        Store a recipe owned by ``principal`` and notify its webhook.

        The recipe stays stored whatever the webhook outcome; a failed
        delivery is reported in the returned ``webhook`` field.
        """
        recipe = await self.entities.insert({**payload, "owner_id": principal.id})
        logger.info("Recipe %s created by %s", recipe.id, principal.id)

        if not principal.webhook_url:
            return RecipeCreation(
                recipe=recipe,
                webhook=WebhookDelivery(delivered=False, error="No webhook registered."),
            )

        try:
            response = await self.send_webhook(
                webhook_payload(recipe), principal.secret, principal.webhook_url
            )
        except WebhookError as e:
            reason = _root_cause(e)
            logger.error("Recipe %s stored but webhook failed: %s", recipe.id, reason)
            return RecipeCreation(
                recipe=recipe,
                webhook=WebhookDelivery(delivered=False, error=str(reason)),
            )

        return RecipeCreation(
            recipe=recipe,
            webhook=WebhookDelivery(delivered=True, status_code=response.status_code),
        )

    async def search_term(self, pattern: str) -> list[Recipe]:
        return await self.entities.search_term(pattern)

    async def send_webhook(self, payload: dict, secret: str, webhook_url: str):
        try:
            return await self.dispatcher.send_webhook(payload, secret, webhook_url)
        except Exception as error:
            raise handle_error(error, "Failed to send webhook.") from error
