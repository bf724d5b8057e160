"""Integration tests for health endpoints."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_liveness_always_healthy(client: AsyncClient) -> None:
    """GET /health should always return 200."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_readiness_against_test_database(client: AsyncClient, db_session_factory) -> None:
    """GET /health/ready runs SELECT 1 against the configured database."""
    with patch(
        "voicenotes.backend.api.health.get_session_factory",
        return_value=db_session_factory,
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "healthy"


@pytest.mark.asyncio
async def test_readiness_reports_503_when_database_unreachable(client: AsyncClient) -> None:
    with patch(
        "voicenotes.backend.api.health.get_session_factory",
        side_effect=OSError("connection refused"),
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["detail"]["checks"]["database"]["status"] == "unhealthy"
