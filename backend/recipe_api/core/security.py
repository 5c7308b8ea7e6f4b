"""
Security utilities for password hashing and JWT token management.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt
from passlib.context import CryptContext

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    The comparison runs in constant time.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the time of a real verification when there is no hash to check."""
    pwd_context.dummy_verify()


def create_access_token(
    claims: dict[str, Any],
    private_key: str,
    algorithm: str,
    expires_delta: timedelta,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        claims: Application claims to embed (id, role, ...)
        private_key: PEM encoded signing key
        algorithm: Signing algorithm (RS256)
        expires_delta: Lifetime of the token

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)

    payload = {
        **claims,
        "iat": now,
        "exp": now + expires_delta,
        "jti": uuid.uuid4().hex,
    }

    return jwt.encode(payload, private_key, algorithm=algorithm)


def decode_token(token: str, public_key: str, algorithm: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token string to decode
        public_key: PEM encoded verification key
        algorithm: The only accepted algorithm

    Returns:
        Decoded payload dictionary

    Raises:
        ExpiredSignatureError: If the token has expired
        JWTError: If the token is invalid
    """
    return jwt.decode(token, public_key, algorithms=[algorithm])


def read_unverified_claims(token: str) -> dict[str, Any]:
    """
    Read claims without checking the signature.

    Raises:
        JWTError: If the token cannot be decoded at all
    """
    return jwt.get_unverified_claims(token)


def seconds_until_expiry(payload: dict[str, Any]) -> int:
    """
    Remaining lifetime of a decoded token payload, in whole seconds.

    Args:
        payload: Decoded JWT payload

    Returns:
        Seconds until ``exp`` (0 when expired or missing)
    """
    exp = payload.get("exp")
    if exp is None:
        return 0
    remaining = datetime.fromtimestamp(exp, tz=timezone.utc) - datetime.now(timezone.utc)
    return max(int(remaining.total_seconds()), 0)
