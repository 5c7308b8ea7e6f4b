"""
Principal: the identity carried by a verified access token.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from recipe_api.models.user import User, UserRole


class Principal(BaseModel):
    """Authenticated identity. Rebuilt from token claims on every request."""
    id: str = Field(..., description="User id")
    role: UserRole = Field(..., description="User role")
    secret: str = Field(default="", description="Webhook secret of the user")
    webhook_url: Optional[str] = Field(None, description="Registered webhook URL")
    expiry: Optional[datetime] = Field(None, description="Token expiry, set once issued")

    class Config:
        frozen = True
        use_enum_values = True

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            role=user.role,
            secret=user.secret,
            webhook_url=user.webhook_url,
        )

    def claims(self) -> dict:
        """Application claims embedded in an access token."""
        return {
            "id": self.id,
            "role": self.role,
            "secret": self.secret,
            "webhook_url": self.webhook_url,
        }
