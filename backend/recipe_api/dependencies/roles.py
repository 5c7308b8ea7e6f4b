"""
Role-based access control dependencies.
"""
from typing import Callable

from fastapi import Depends

from recipe_api.dependencies.auth import get_current_principal
from recipe_api.errors import AuthError, AuthErrorKind
from recipe_api.models.principal import Principal
from recipe_api.models.user import UserRole
from recipe_api.services.credential_service import CredentialService


def require_roles(*allowed_roles: UserRole) -> Callable:
    """
    Dependency factory for role-based access control.

    Usage:
        @router.delete("/recipe/{recipe_id}")
        async def delete_recipe(principal: Principal = Depends(require_roles(UserRole.ADMIN))):
            ...

    Args:
        *allowed_roles: Roles that are allowed to access the route

    Returns:
        Dependency function that validates the principal's role
    """
    async def role_checker(
        principal: Principal = Depends(get_current_principal)
    ) -> Principal:
        if not CredentialService.authorize(principal.role, allowed_roles):
            raise AuthError("Unauthorized", kind=AuthErrorKind.INSUFFICIENT_ROLE)
        return principal

    return role_checker


def require_admin() -> Callable:
    """Shortcut dependency for admin-only routes."""
    return require_roles(UserRole.ADMIN)


def require_any_authenticated() -> Callable:
    """Dependency that allows any authenticated principal (any role)."""
    return require_roles(UserRole.USER, UserRole.ADMIN)
