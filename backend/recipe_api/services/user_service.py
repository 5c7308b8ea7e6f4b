"""
User service for registration, login, logout and webhook registration.
"""
import logging
import secrets

from recipe_api.core.security import hash_password
from recipe_api.errors import ValidationError, handle_error
from recipe_api.models.principal import Principal
from recipe_api.models.user import User
from recipe_api.services.base import EntityService
from recipe_api.services.credential_service import CredentialService

logger = logging.getLogger(__name__)


class UserService:
    """Service for user account operations."""

    def __init__(self, entities: EntityService[User], credentials: CredentialService):
        self.entities = entities
        self.credentials = credentials

    async def insert(self, payload: dict) -> User:
        """
        Create a user, hashing the password before it is persisted.

        Args:
            payload: username, password, email and optional role

        Raises:
            ValidationError: Missing password, duplicate username/email or
                invalid fields
        """
        data = dict(payload)
        password = data.pop("password", None)
        if not password:
            raise ValidationError("Password is required.")

        data["password_hash"] = hash_password(password)
        data["secret"] = ""
        data.pop("webhook_url", None)
        user = await self.entities.insert(data)
        logger.info("Registered user %s (%s)", user.username, user.role)
        return user

    async def register(self, payload: dict) -> tuple[User, str]:
        """Create a user and its webhook secret. Returns both."""
        user = await self.insert(payload)
        secret = await self.create_webhook(user)
        return user, secret

    async def create_webhook(self, user: User) -> str:
        """
        Generate and persist the user's webhook secret.

        The secret is created once; later calls return the stored value.

        Returns:
            The webhook secret
        """
        if user.secret:
            return user.secret

        try:
            secret = secrets.token_hex(32)
            await self.entities.repository.update_or_replace(user, {"secret": secret})
            return secret
        except Exception as error:
            raise handle_error(error, "Failed to create webhook.") from error

    async def save_webhook(self, webhook_url: str, user_id: str) -> User:
        """Register (or overwrite) the webhook URL of a user."""
        user = await self.entities.get_by_id(user_id)
        updated = await self.entities.update_or_replace(user, {"webhook_url": webhook_url})
        logger.info("Webhook registered for user %s", user_id)
        return updated

    async def login(self, username: str, password: str) -> Principal:
        try:
            return await self.credentials.login(username, password)
        except Exception as error:
            raise handle_error(error, "Failed to log in user.") from error

    async def generate_token(self, principal: Principal) -> str:
        try:
            return self.credentials.issue_token(principal)
        except Exception as error:
            raise handle_error(error, "Failed to generate token.") from error

    async def log_out(self, token: str) -> bool:
        try:
            return await self.credentials.revoke(token)
        except Exception as error:
            raise handle_error(error, "Failed to log out user.") from error
