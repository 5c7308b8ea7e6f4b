"""
User model for the users collection.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserRole(str, Enum):
    """User role levels."""
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """
    User document model for MongoDB recipes_db.users collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    username: str = Field(..., min_length=1, description="Unique username")
    password_hash: str = Field(..., min_length=1, description="Bcrypt hashed password")
    email: EmailStr = Field(..., description="Unique email address")
    role: UserRole = Field(default=UserRole.USER, description="Role assigned to user")
    secret: str = Field(default="", description="Webhook signing secret, generated once")
    webhook_url: Optional[str] = Field(None, description="Registered webhook URL")

    class Config:
        populate_by_name = True
        use_enum_values = True
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()
