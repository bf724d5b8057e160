"""
Integration Tests for Request Context Middleware.

Tests that request context is properly propagated through the API.
"""

import pytest
from httpx import AsyncClient


class TestRequestIdHeader:
    """Tests for X-Request-ID header handling."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self, client: AsyncClient):
        """Should generate X-Request-ID when not provided."""
        response = await client.get("/health")

        assert response.status_code == 200
        # UUID format: 8-4-4-4-12 = 36 characters
        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_provided_request_id(self, client: AsyncClient):
        """Should echo a caller-supplied X-Request-ID."""
        response = await client.get("/health", headers={"X-Request-ID": "voice-client-42"})

        assert response.headers["X-Request-ID"] == "voice-client-42"

    @pytest.mark.asyncio
    async def test_success_envelope_carries_request_id(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/notes",
            headers={**auth_headers, "X-Request-ID": "list-notes-1"},
        )

        assert response.status_code == 200
        assert response.json()["metadata"]["request_id"] == "list-notes-1"


class TestResponseTimeHeader:
    """Tests for X-Response-Time header."""

    @pytest.mark.asyncio
    async def test_includes_response_time(self, client: AsyncClient):
        response = await client.get("/health")

        time_header = response.headers["X-Response-Time"]
        assert time_header.endswith("ms")
        assert time_header[:-2].isdigit()

    @pytest.mark.asyncio
    async def test_response_time_on_error(self, client: AsyncClient, auth_headers):
        """Should include response time even on error responses."""
        response = await client.get("/api/v1/notes/nonexistent-id", headers=auth_headers)

        assert response.status_code == 404
        assert "X-Response-Time" in response.headers


class TestRequestContextInErrors:
    """Tests for request context in error responses."""

    @pytest.mark.asyncio
    async def test_not_found_includes_request_id(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/notes/nonexistent",
            headers={**auth_headers, "X-Request-ID": "error-test-request-id"},
        )

        assert response.status_code == 404
        assert response.json()["metadata"]["request_id"] == "error-test-request-id"

    @pytest.mark.asyncio
    async def test_unauthorized_includes_request_id(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/folders",
            headers={"X-Request-ID": "no-token-request-id"},
        )

        assert response.status_code == 401
        assert response.json()["metadata"]["request_id"] == "no-token-request-id"

    @pytest.mark.asyncio
    async def test_validation_error_includes_request_id(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/notes",
            json={},
            headers={**auth_headers, "X-Request-ID": "validation-error-request-id"},
        )

        assert response.status_code == 400
        assert response.json()["metadata"]["request_id"] == "validation-error-request-id"
