"""
Integration Tests for Auth API.

Tests registration, login and bearer-token gating end to end.
"""

import pytest
from httpx import AsyncClient

API = "/api/v1"


class TestRegister:
    """Tests for POST /api/v1/auth/register."""

    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/register",
            json={"name": "Olena", "email": "olena@example.com", "password": "password123"},
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["user"]["email"] == "olena@example.com"
        assert data["user"]["name"] == "Olena"
        assert "createdAt" in data["user"]
        assert "hashedPassword" not in data["user"]
        assert data["token"]
        assert data["tokenType"] == "bearer"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, client: AsyncClient, api, auth_headers):
        response = await client.post(
            f"{API}/auth/register",
            json={"name": "Owner Again", "email": "owner@example.com", "password": "password123"},
        )

        api.assert_error(response, 409, "RES_CONFLICT")

    @pytest.mark.asyncio
    async def test_short_password_is_rejected(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/register",
            json={"name": "Olena", "email": "olena@example.com", "password": "short"},
        )

        api.assert_validation_error(response, field="password")


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    @pytest.mark.asyncio
    async def test_login_with_valid_credentials(self, client: AsyncClient, api, auth_headers):
        response = await client.post(
            f"{API}/auth/login",
            json={"email": "owner@example.com", "password": "password123"},
        )

        data = api.assert_success(response)["data"]
        assert data["user"]["email"] == "owner@example.com"
        assert data["token"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_unauthorized(self, client: AsyncClient, api, auth_headers):
        response = await client.post(
            f"{API}/auth/login",
            json={"email": "owner@example.com", "password": "not-the-password"},
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")
        assert response.headers["www-authenticate"] == "Bearer"


class TestIdentity:
    """Tests for bearer token gating."""

    @pytest.mark.asyncio
    async def test_me_returns_caller(self, client: AsyncClient, api, auth_headers):
        response = await client.get(f"{API}/auth/me", headers=auth_headers)

        assert api.assert_success(response)["data"]["email"] == "owner@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "Bearer not-a-token"}, {"Authorization": "Basic abc"}],
    )
    async def test_notes_require_valid_token(self, client: AsyncClient, api, headers):
        response = await client.get(f"{API}/notes", headers=headers)

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")


class TestPasswordReset:
    """Tests for POST /api/v1/auth/request-password-reset."""

    @pytest.mark.asyncio
    async def test_known_and_unknown_email_get_same_answer(
        self, client: AsyncClient, api, auth_headers
    ):
        known = await client.post(
            f"{API}/auth/request-password-reset", json={"email": "owner@example.com"}
        )
        unknown = await client.post(
            f"{API}/auth/request-password-reset", json={"email": "ghost@example.com"}
        )

        assert api.assert_success(known)["data"] == api.assert_success(unknown)["data"]
