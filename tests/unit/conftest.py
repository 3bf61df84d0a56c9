"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

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
    return result


# =============================================================================
# Settings Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> MagicMock:
    """Mock secrets."""
    settings = MagicMock()
    settings.db_password = "test_pass"
    settings.jwt_secret = "test-secret-key"
    return settings


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                ...
    """
    config = MagicMock()
    config.application.pagination.max_limit = 100
    config.database.search_language = "english"
    config.security.jwt.algorithm = "HS256"
    config.security.jwt.access_token_expire_minutes = 60
    config.security.jwt.audience = "cloudnotes-api"
    config.features.admin_analytics_enabled = False
    config.features.api_request_logging = False
    return config
