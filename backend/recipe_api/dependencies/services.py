"""
Service dependencies resolved from the composition root on ``app.state``.
"""
from fastapi import Request

from recipe_api.container import Services
from recipe_api.services.credential_service import CredentialService
from recipe_api.services.recipe_service import RecipeService
from recipe_api.services.user_service import UserService


def get_services(request: Request) -> Services:
    """Dependency returning the shared services."""
    return request.app.state.services


def get_credential_service(request: Request) -> CredentialService:
    return get_services(request).credentials


def get_user_service(request: Request) -> UserService:
    return get_services(request).users


def get_recipe_service(request: Request) -> RecipeService:
    return get_services(request).recipes
