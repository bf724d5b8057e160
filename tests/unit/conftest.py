"""
Unit Test Fixtures.

Fixtures for unit tests - external dependencies are mocked.
Service tests that need real SQL use the in-memory db_session from the
root conftest instead of a server.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = note
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.scalars.return_value.first = MagicMock(return_value=None)
    return result


# =============================================================================
# Config Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> SimpleNamespace:
    """
    Secrets with test values.

    Usage:
        def test_with_settings(mock_settings):
            with patch("module.get_settings", return_value=mock_settings):
                ...
    """
    return SimpleNamespace(
        db_password="test_pass",
        jwt_secret="test-secret-key-that-is-long-enough-for-testing",
    )


@pytest.fixture
def mock_app_config() -> SimpleNamespace:
    """
    Attribute-style stand-in for AppConfig.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                ...
    """
    client = SimpleNamespace(
        store="memory",
        token_file="data/test_token",
        memory_file="data/test_memory.json",
        voice_command_interval_seconds=1.5,
        retry=SimpleNamespace(max_attempts=2, backoff_multiplier=0, backoff_max=0),
        circuit_breaker=SimpleNamespace(fail_max=3, timeout_duration=30),
    )
    application = SimpleNamespace(
        name="Test Voice Notes",
        version="1.0.0",
        description="Test application",
        environment="test",
        debug=True,
        api_prefix="/api/v1",
        server=SimpleNamespace(host="127.0.0.1", port=8000),
        cors=SimpleNamespace(origins=[]),
        timeouts=SimpleNamespace(database=5, external_api=5),
        client=client,
    )
    features = SimpleNamespace(
        auth_registration_enabled=True,
        api_request_logging=False,
        notes_search_enabled=True,
        security_startup_checks_enabled=False,
    )
    security = SimpleNamespace(
        jwt=SimpleNamespace(
            algorithm="HS256", access_token_expire_minutes=60, audience="voicenotes-api"
        ),
        secrets_validation=SimpleNamespace(jwt_secret_min_length=32),
    )
    return SimpleNamespace(
        application=application,
        features=features,
        security=security,
    )
