"""
Authentication dependencies for route protection.
"""
from typing import Annotated, Optional

from fastapi import Depends, Header

from recipe_api.errors import AuthError, AuthErrorKind
from recipe_api.models.principal import Principal
from recipe_api.services.credential_service import CredentialService
from recipe_api.dependencies.services import get_credential_service


async def get_bearer_token(
    authorization: Annotated[Optional[str], Header(description="Bearer <token>")] = None,
) -> str:
    """
    Dependency extracting the token from ``Authorization: Bearer <token>``.

    Raises:
        AuthError 403: If the header is missing or uses another scheme
    """
    if not authorization:
        raise AuthError("Unauthorized", kind=AuthErrorKind.MISSING_TOKEN)

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer":
        raise AuthError("Invalid authentication scheme.", kind=AuthErrorKind.INVALID_SCHEME)

    token = token.strip()
    if not token:
        raise AuthError("Unauthorized", kind=AuthErrorKind.MISSING_TOKEN)
    return token


async def get_current_principal(
    token: Annotated[str, Depends(get_bearer_token)],
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
) -> Principal:
    """
    Dependency to get the current principal from the bearer token.

    Raises:
        AuthError 403: If the token is malformed, forged, expired or revoked
    """
    return await credentials.verify_token(token)


# Type aliases for cleaner route signatures
BearerToken = Annotated[str, Depends(get_bearer_token)]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
