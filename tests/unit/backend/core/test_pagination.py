"""
Unit Tests for pagination parameters.
"""

from unittest.mock import patch

import pytest

from cloudnotes.backend.core.exceptions import ValidationError
from cloudnotes.backend.core.pagination import PaginationParams, get_pagination_params


class TestPaginationParams:
    def test_no_limit_returns_everything(self):
        params = get_pagination_params(limit=None, offset=0)

        assert params == PaginationParams(limit=None, offset=0)

    def test_limit_and_offset(self):
        params = get_pagination_params(limit=10, offset=30)

        assert params.limit == 10
        assert params.offset == 30

    def test_limit_above_configured_maximum(self, mock_app_config):
        mock_app_config.application.pagination.max_limit = 5

        with patch("cloudnotes.backend.core.pagination.get_app_config", return_value=mock_app_config):
            with pytest.raises(ValidationError) as exc_info:
                get_pagination_params(limit=6, offset=0)

        assert "limit" in exc_info.value.details

    def test_limit_at_maximum_allowed(self, mock_app_config):
        mock_app_config.application.pagination.max_limit = 5

        with patch("cloudnotes.backend.core.pagination.get_app_config", return_value=mock_app_config):
            params = get_pagination_params(limit=5, offset=0)

        assert params.limit == 5
