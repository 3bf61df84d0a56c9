"""
Unit Tests for Exception Handlers.

Tests the exception handler functions in isolation.
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError

from cloudnotes.backend.core.exception_handlers import (
    EXCEPTION_STATUS_MAP,
    GENERIC_SERVER_MESSAGE,
    _get_request_id,
    application_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from cloudnotes.backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    InvalidCredentialsError,
    InvalidSessionError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_request():
    request = MagicMock()
    request.url.path = "/api/notes"
    request.method = "GET"
    request.state.request_id = "req-1"
    return request


def _body(response) -> dict:
    return json.loads(response.body)


class TestExceptionStatusMapping:
    """Exception to HTTP status mapping."""

    @pytest.mark.parametrize(
        ("exc_type", "status"),
        [
            (ValidationError, 400),
            (AuthenticationError, 401),
            (InvalidCredentialsError, 401),
            (InvalidSessionError, 403),
            (NotFoundError, 404),
            (ConflictError, 409),
            (DatabaseError, 500),
        ],
    )
    def test_status(self, exc_type, status):
        assert EXCEPTION_STATUS_MAP[exc_type] == status


class TestApplicationErrorHandler:
    async def test_client_error_keeps_message(self, mock_request):
        response = await application_error_handler(mock_request, NotFoundError("Note not found"))

        assert response.status_code == 404
        body = _body(response)
        assert body["success"] is False
        assert body["error"] == {
            "code": "RES_NOT_FOUND",
            "message": "Note not found",
            "details": None,
        }
        assert body["metadata"]["request_id"] == "req-1"

    async def test_validation_error_includes_details(self, mock_request):
        exc = ValidationError("Required fields missing", details={"missing_fields": ["title"]})

        response = await application_error_handler(mock_request, exc)

        assert response.status_code == 400
        assert _body(response)["error"]["details"] == {"missing_fields": ["title"]}

    async def test_server_error_hides_message(self, mock_request):
        exc = DatabaseError("connection to 10.0.0.3 refused")

        response = await application_error_handler(mock_request, exc)

        assert response.status_code == 500
        error = _body(response)["error"]
        assert error["code"] == "SYS_DATABASE_ERROR"
        assert error["message"] == GENERIC_SERVER_MESSAGE

    async def test_unauthorized_sets_www_authenticate(self, mock_request):
        response = await application_error_handler(mock_request, AuthenticationError())

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_invalid_session_is_forbidden_without_challenge(self, mock_request):
        response = await application_error_handler(mock_request, InvalidSessionError())

        assert response.status_code == 403
        assert "WWW-Authenticate" not in response.headers


class TestValidationErrorHandler:
    async def test_returns_400_with_fields(self, mock_request):
        exc = RequestValidationError(
            [{"loc": ("body", "title"), "msg": "Field required", "type": "missing"}]
        )

        response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 400
        error = _body(response)["error"]
        assert error["code"] == "VAL_REQUEST_INVALID"
        assert error["details"]["validation_errors"] == [
            {"field": "body.title", "message": "Field required", "type": "missing"}
        ]


class TestUnhandledExceptionHandler:
    async def test_returns_generic_500(self, mock_request):
        response = await unhandled_exception_handler(mock_request, RuntimeError("boom"))

        assert response.status_code == 500
        error = _body(response)["error"]
        assert error["code"] == "SYS_INTERNAL_ERROR"
        assert "boom" not in error["message"]


class TestGetRequestId:
    def test_prefers_state(self, mock_request):
        assert _get_request_id(mock_request) == "req-1"

    def test_falls_back_to_header(self):
        request = MagicMock()
        request.state = object()
        request.headers = {"x-request-id": "from-header"}

        assert _get_request_id(request) == "from-header"
