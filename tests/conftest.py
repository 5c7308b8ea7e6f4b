"""
Global test fixtures for the Recipe API.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Mock Redis (fakeredis)
- RSA key pairs for RS256 tokens
- The application wired to the mocks, with outbound webhooks recorded
- Registered user and admin tokens
"""

import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from helpers import API, auth_header, login, register

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# RSA Keys
# =============================================================================

def generate_rsa_key_pair() -> tuple[str, str]:
    """Generate a PEM encoded (private, public) RSA key pair."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_keys() -> tuple[str, str]:
    """Signing key pair used by the application under test."""
    return generate_rsa_key_pair()


@pytest.fixture(scope="session")
def other_rsa_keys() -> tuple[str, str]:
    """Unrelated key pair, for forged tokens."""
    return generate_rsa_key_pair()


@pytest.fixture
def settings(rsa_keys):
    """Settings for tests: development mode, in-process revocation."""
    from recipe_api.config import Settings

    private_pem, public_pem = rsa_keys
    return Settings(
        environment="development",
        jwt_private_key=private_pem,
        jwt_public_key=public_pem,
        revocation_use_redis=False,
        default_per_page=20,
    )


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB with motor's awaitable API.
    """
    from mongomock_motor import AsyncMongoMockClient

    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_recipes_db(mock_async_mongo_client, settings):
    """Provide mock recipes database with the real indexes."""
    from recipe_api.database.databases.recipes_db import create_indexes

    db = mock_async_mongo_client[settings.mongo_db_name]
    await create_indexes(db)
    yield db


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_redis():
    """
    Create an async mock Redis client using fakeredis.
    """
    import fakeredis

    redis_client = fakeredis.FakeAsyncRedis(decode_responses=True)
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


# =============================================================================
# Webhook Receiver
# =============================================================================

class WebhookRecorder:
    """
    In-memory webhook receiver.

    Every request is recorded. URLs containing ``/fail`` answer 500 and
    URLs containing ``/down`` raise a connection error.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if "/down" in request.url.path:
            raise httpx.ConnectError("Connection refused", request=request)
        if "/fail" in request.url.path:
            return httpx.Response(500, json={"error": "receiver failed"})
        return httpx.Response(200, json={"received": True})

    def bodies(self) -> list[dict]:
        import json

        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def webhook_recorder() -> WebhookRecorder:
    return WebhookRecorder()


@pytest_asyncio.fixture
async def webhook_client(webhook_recorder):
    """HTTP client for outbound webhooks, served by the recorder."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(webhook_recorder)) as client:
        yield client


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def services(settings, mock_recipes_db, webhook_client):
    """Services wired to the mock database and the webhook recorder."""
    from recipe_api.container import build_services

    built = build_services(settings, mock_recipes_db, redis=None, webhook_client=webhook_client)
    yield built
    await built.close()


@pytest.fixture
def app(services):
    """
    Create FastAPI app for testing, using the prebuilt services.
    """
    from recipe_api.main import create_app

    return create_app(services=services)


@pytest_asyncio.fixture
async def async_client(app):
    """
    Create an async test client.
    """
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration."""
    return {
        "username": "testuser",
        "email": "testuser@example.com",
        "password": "SecurePassword123!",
    }


@pytest.fixture
def test_admin_data() -> dict:
    """Admin user data."""
    return {
        "username": "chef",
        "email": "chef@example.com",
        "password": "AdminPassword123!",
        "role": "admin",
    }


@pytest_asyncio.fixture
async def user_token(async_client, test_user_data) -> str:
    """Token of a registered regular user."""
    await register(async_client, test_user_data)
    return await login(async_client, test_user_data["username"], test_user_data["password"])


@pytest_asyncio.fixture
async def admin_token(async_client, test_admin_data) -> str:
    """Token of a registered admin with a webhook URL registered."""
    await register(async_client, test_admin_data)
    token = await login(async_client, test_admin_data["username"], test_admin_data["password"])

    response = await async_client.post(
        f"{API}/user/webhook",
        json={"webhook": "http://hooks.test/recipes"},
        headers=auth_header(token),
    )
    assert response.status_code == 201, response.text

    # Tokens carry the webhook URL, so log in again to pick it up
    return await login(async_client, test_admin_data["username"], test_admin_data["password"])


@pytest.fixture
def muffin_recipe() -> dict:
    """A complete recipe payload."""
    return {
        "title": "Muffin",
        "ingredients": ["flour", "sugar", "eggs"],
        "servings": "4",
        "instructions": ["Mix.", "Bake."],
        "category": "Dessert",
    }
