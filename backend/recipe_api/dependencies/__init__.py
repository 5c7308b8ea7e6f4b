"""
Dependencies for dependency injection in routes.
"""
from recipe_api.dependencies.auth import get_bearer_token, get_current_principal
from recipe_api.dependencies.roles import require_roles, require_admin, require_any_authenticated
from recipe_api.dependencies.services import (
    get_services,
    get_credential_service,
    get_user_service,
    get_recipe_service,
)

__all__ = [
    "get_bearer_token",
    "get_current_principal",
    "require_roles",
    "require_admin",
    "require_any_authenticated",
    "get_services",
    "get_credential_service",
    "get_user_service",
    "get_recipe_service",
]
