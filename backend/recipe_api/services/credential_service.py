"""
Credential service: password login, token issuance, verification,
revocation and role checks.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable

from jose import ExpiredSignatureError, JWTError

from recipe_api.core.revocation import TokenRevocationStore
from recipe_api.core.security import (
    create_access_token,
    decode_token,
    dummy_verify,
    read_unverified_claims,
    seconds_until_expiry,
    verify_password,
)
from recipe_api.errors import AuthError, AuthErrorKind
from recipe_api.models.principal import Principal
from recipe_api.models.user import User, UserRole
from recipe_api.repositories.base import MongoRepository

logger = logging.getLogger(__name__)


class CredentialService:
    """Service for authentication and authorization operations."""

    def __init__(
        self,
        users: MongoRepository[User],
        revocations: TokenRevocationStore,
        private_key: str,
        public_key: str,
        algorithm: str = "RS256",
        token_life_seconds: int = 3600,
    ):
        self.users = users
        self.revocations = revocations
        self.private_key = private_key
        self.public_key = public_key
        self.algorithm = algorithm
        self.token_life = timedelta(seconds=token_life_seconds)

    async def login(self, username: str, password: str) -> Principal:
        """
        Authenticate a user by username and password.

        Args:
            username: Username
            password: Plain text password

        Returns:
            Principal for the user (not yet carrying an expiry)

        Raises:
            AuthError: INVALID_CREDENTIALS, whichever check failed
        """
        invalid = AuthError("Invalid credentials", kind=AuthErrorKind.INVALID_CREDENTIALS)

        if not username or not password:
            raise invalid

        user = await self.users.get_by_key(username)
        if user is None:
            dummy_verify()
            raise invalid

        if not verify_password(password, user.password_hash):
            raise invalid

        return Principal.from_user(user)

    def issue_token(self, principal: Principal) -> str:
        """
        Sign an access token for a principal.

        Returns:
            Encoded RS256 JWT carrying id, role, secret and webhook_url
        """
        token = create_access_token(
            claims=principal.claims(),
            private_key=self.private_key,
            algorithm=self.algorithm,
            expires_delta=self.token_life,
        )
        logger.info("Issued access token for user %s", principal.id)
        return token

    async def verify_token(self, token: str) -> Principal:
        """
        Verify a token and rebuild its principal.

        Raises:
            AuthError: MALFORMED, INVALID_SIGNATURE, EXPIRED or REVOKED
        """
        if not token:
            raise AuthError("Unauthorized", kind=AuthErrorKind.MALFORMED)

        try:
            read_unverified_claims(token)
        except JWTError as e:
            raise AuthError("Unauthorized", kind=AuthErrorKind.MALFORMED, cause=e) from e

        try:
            payload = decode_token(token, self.public_key, self.algorithm)
        except ExpiredSignatureError as e:
            raise AuthError("Unauthorized", kind=AuthErrorKind.EXPIRED, cause=e) from e
        except JWTError as e:
            raise AuthError("Unauthorized", kind=AuthErrorKind.INVALID_SIGNATURE, cause=e) from e

        if await self.revocations.is_revoked(token):
            raise AuthError("Unauthorized", kind=AuthErrorKind.REVOKED)

        try:
            return Principal(
                id=payload["id"],
                role=payload["role"],
                secret=payload.get("secret") or "",
                webhook_url=payload.get("webhook_url"),
                expiry=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise AuthError("Unauthorized", kind=AuthErrorKind.MALFORMED, cause=e) from e

    async def revoke(self, token: str) -> bool:
        """
        Revoke a token. Idempotent.

        Returns:
            True if the token was newly revoked
        """
        try:
            ttl = seconds_until_expiry(read_unverified_claims(token))
        except JWTError:
            ttl = int(self.token_life.total_seconds())

        newly_revoked = await self.revocations.revoke(token, ttl)
        if newly_revoked:
            logger.info("Token revoked (expires in %ss)", ttl)
        return newly_revoked

    @staticmethod
    def authorize(role: str, required_roles: Iterable[str]) -> bool:
        """True iff ``role`` is one of ``required_roles``. No role implies another."""
        allowed = {UserRole(r).value for r in required_roles}
        try:
            return UserRole(role).value in allowed
        except ValueError:
            return False
