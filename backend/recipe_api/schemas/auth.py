"""
User and authentication request/response schemas.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from recipe_api.models.user import UserRole


class ActionLink(BaseModel):
    """Hypermedia link to a follow-up action."""
    href: str = Field(..., description="Target URL")
    method: str = Field(default="POST", description="HTTP method to use")


class RegisterRequest(BaseModel):
    """Registration request body."""
    username: str = Field(..., min_length=1, description="Unique username")
    password: str = Field(
        ...,
        min_length=10,
        max_length=256,
        description="User password (10 to 256 characters)"
    )
    email: EmailStr = Field(..., description="User email address")
    # Self-selected; gated by Settings.allow_admin_self_registration
    role: UserRole = Field(default=UserRole.USER, description="Requested role")

    class Config:
        str_strip_whitespace = True
        use_enum_values = True


class RegisterResponse(BaseModel):
    """Registration response."""
    id: str = Field(..., description="Created user ID")
    webhook_secret: str = Field(..., description="Secret sent along with webhooks")
    message: str = Field(default="User created.", description="Success message")
    links: list[ActionLink] = Field(default=[], description="Follow-up actions")


class LoginRequest(BaseModel):
    """Login request body."""
    username: str = Field(default="", description="Username")
    password: str = Field(default="", description="User password")


class LoginResponse(BaseModel):
    """Login response with JWT token."""
    access_token: str = Field(..., description="JWT access token")


class LogoutResponse(BaseModel):
    """Logout response."""
    message: str = Field(default="You have logged out.", description="Result message")
    links: list[ActionLink] = Field(default=[], description="Follow-up actions")


class WebhookRegisterRequest(BaseModel):
    """Webhook registration body. ``id`` defaults to the caller."""
    id: Optional[str] = Field(None, description="User to register the webhook for")
    webhook: str = Field(..., min_length=1, description="Webhook URL")


class WebhookRegisterResponse(BaseModel):
    """Webhook registration response."""
    message: str = Field(default="Webhook registered successfully", description="Result message")
    webhook_secret: str = Field(..., description="Secret included in every webhook body")
