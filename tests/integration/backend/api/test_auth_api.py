"""
Integration Tests for Auth API and the access gate.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from cloudnotes.backend.core.config import get_app_config, get_settings
from cloudnotes.backend.core.security import resolve_session_token
from cloudnotes.backend.core.utils import utc_now

API = "/api"
CREDENTIALS = {"email": "ada@example.com", "password": "correct-horse"}


class TestSignup:
    """Tests for POST /api/auth/signup."""

    async def test_signup_returns_id_and_email(self, client: AsyncClient, api):
        response = await client.post(f"{API}/auth/signup", json=CREDENTIALS)

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["email"] == "ada@example.com"
        assert data["id"]
        assert "password_hash" not in data
        assert "password" not in data

    async def test_duplicate_email_conflicts(self, client: AsyncClient, api):
        await client.post(f"{API}/auth/signup", json=CREDENTIALS)

        response = await client.post(
            f"{API}/auth/signup",
            json={"email": CREDENTIALS["email"], "password": "another-password"},
        )

        api.assert_error(response, 409, "RES_CONFLICT")

    async def test_short_password_accepted(self, client: AsyncClient, api):
        short = {"email": "short@example.com", "password": "abc"}

        response = await client.post(f"{API}/auth/signup", json=short)

        api.assert_success(response, expected_status=201)
        login = await client.post(f"{API}/auth/login", json=short)
        assert api.assert_success(login)["data"]["token"]

    async def test_empty_password_rejected(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/signup",
            json={"email": "empty@example.com", "password": ""},
        )

        api.assert_validation_error(response, field="password")

    async def test_email_stored_as_given(self, client: AsyncClient, api):
        mixed = {"email": "Ada@Example.COM", "password": "correct-horse"}

        response = await client.post(f"{API}/auth/signup", json=mixed)

        assert api.assert_success(response, expected_status=201)["data"]["email"] == "Ada@Example.COM"
        api.assert_success(await client.post(f"{API}/auth/login", json=mixed))

    async def test_invalid_email_rejected(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/signup",
            json={"email": "not-an-email", "password": "correct-horse"},
        )

        api.assert_validation_error(response, field="email")

    async def test_missing_password_rejected(self, client: AsyncClient, api):
        response = await client.post(f"{API}/auth/signup", json={"email": "a@example.com"})

        api.assert_validation_error(response, field="password")


class TestLogin:
    """Tests for POST /api/auth/login."""

    async def test_login_token_resolves_to_created_user(self, client: AsyncClient, api):
        created = (await client.post(f"{API}/auth/signup", json=CREDENTIALS)).json()["data"]

        response = await client.post(f"{API}/auth/login", json=CREDENTIALS)

        data = api.assert_success(response)["data"]
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 60 * 60
        assert resolve_session_token(data["token"]) == created["id"]

    async def test_wrong_password_is_invalid_credentials(self, client: AsyncClient, api):
        await client.post(f"{API}/auth/signup", json=CREDENTIALS)

        response = await client.post(
            f"{API}/auth/login",
            json={"email": CREDENTIALS["email"], "password": "wrong-password"},
        )

        data = api.assert_error(response, 401, "AUTH_INVALID_CREDENTIALS")
        assert data["error"]["message"] == "Invalid credentials"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_unknown_email_is_indistinguishable(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/login",
            json={"email": "nobody@example.com", "password": "whatever-pass"},
        )

        data = api.assert_error(response, 401, "AUTH_INVALID_CREDENTIALS")
        assert data["error"]["message"] == "Invalid credentials"


class TestAccessGate:
    """Bearer token handling on protected routes."""

    async def test_missing_token_is_unauthorized(self, client: AsyncClient, api):
        response = await client.get(f"{API}/notes")

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    async def test_non_bearer_scheme_is_unauthorized(self, client: AsyncClient, api):
        response = await client.get(
            f"{API}/notes",
            headers={"Authorization": "Basic dXNlcjpwYXNz"},
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    async def test_garbage_token_is_invalid_session(self, client: AsyncClient, api):
        response = await client.get(
            f"{API}/notes",
            headers={"Authorization": "Bearer not.a.token"},
        )

        api.assert_error(response, 403, "AUTH_INVALID_SESSION")

    async def test_expired_token_is_invalid_session(self, client: AsyncClient, api):
        jwt_config = get_app_config().security.jwt
        token = jwt.encode(
            {
                "sub": "some-user",
                "type": "access",
                "aud": jwt_config.audience,
                "exp": utc_now() - timedelta(minutes=1),
            },
            get_settings().jwt_secret,
            algorithm=jwt_config.algorithm,
        )

        response = await client.get(
            f"{API}/notes",
            headers={"Authorization": f"Bearer {token}"},
        )

        api.assert_error(response, 403, "AUTH_INVALID_SESSION")

    async def test_token_signed_with_other_secret_is_invalid_session(
        self,
        client: AsyncClient,
        api,
    ):
        jwt_config = get_app_config().security.jwt
        token = jwt.encode(
            {
                "sub": "some-user",
                "type": "access",
                "aud": jwt_config.audience,
                "exp": utc_now() + timedelta(minutes=5),
            },
            "another-secret",
            algorithm=jwt_config.algorithm,
        )

        response = await client.get(
            f"{API}/notes",
            headers={"Authorization": f"Bearer {token}"},
        )

        api.assert_error(response, 403, "AUTH_INVALID_SESSION")
