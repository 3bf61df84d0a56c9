"""
Integration Test Fixtures.

Fixtures for integration tests - real database, real services, the full
FastAPI application driven through httpx.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from cloudnotes.backend.core.database import Database

API = "/api"


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the test database.

    Each request runs in its own session and commits, exactly as in
    production; the database fixture drops the tables afterwards.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from cloudnotes.backend.main import create_app

    app = create_app(database=database)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


# =============================================================================
# Authentication Helpers
# =============================================================================


async def signup(client: AsyncClient, email: str, password: str = "s3cret-pass") -> dict[str, Any]:
    response = await client.post(
        f"{API}/auth/signup",
        json={"email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def login(client: AsyncClient, email: str, password: str = "s3cret-pass") -> str:
    response = await client.post(
        f"{API}/auth/login",
        json={"email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


async def bearer_for(client: AsyncClient, email: str) -> dict[str, str]:
    """Sign up a fresh account and return its Authorization header."""
    await signup(client, email)
    token = await login(client, email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """
    Authorization header for a freshly registered user.

    Usage:
        async def test_protected_endpoint(client, auth_headers):
            response = await client.get("/api/notes", headers=auth_headers)
            assert response.status_code == 200
    """
    return await bearer_for(client, "owner@example.com")


@pytest.fixture
async def other_auth_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization header for a second, unrelated user."""
    return await bearer_for(client, "intruder@example.com")


@pytest.fixture
def create_note(client: AsyncClient):
    """
    Factory that creates a note through the API and returns its body.

    Usage:
        note = await create_note(auth_headers, title="A", tags=["x"])
    """

    async def _create(headers: dict[str, str], **fields: Any) -> dict[str, Any]:
        payload = {"title": "Untitled", **fields}
        response = await client.post(f"{API}/notes", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (400)."""
        data = ApiAssertions.assert_error(response, 400, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
