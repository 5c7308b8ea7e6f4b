"""
Request and response schemas for API endpoints.
"""
from recipe_api.schemas.auth import (
    ActionLink,
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    WebhookRegisterRequest,
    WebhookRegisterResponse,
)
from recipe_api.schemas.recipe import (
    RecipeCreate,
    RecipeUpdate,
    RecipeSearchRequest,
    RecipeResponse,
    RecipeCreatedResponse,
    ResourceLinks,
    WebhookDelivery,
)

__all__ = [
    # Auth
    "ActionLink",
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "WebhookRegisterRequest",
    "WebhookRegisterResponse",
    # Recipe
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeSearchRequest",
    "RecipeResponse",
    "RecipeCreatedResponse",
    "ResourceLinks",
    "WebhookDelivery",
]
