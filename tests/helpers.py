"""
Request helpers shared by the API tests.
"""
import httpx

API = "/api/v1"


async def register(client: httpx.AsyncClient, data: dict) -> dict:
    """Register a user and return the response body."""
    response = await client.post(f"{API}/user/register", json=data)
    assert response.status_code == 201, response.text
    return response.json()


async def login(client: httpx.AsyncClient, username: str, password: str) -> str:
    """Log in and return the access token."""
    response = await client.post(
        f"{API}/user/login", json={"username": username, "password": password}
    )
    assert response.status_code == 201, response.text
    return response.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
