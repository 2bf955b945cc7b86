"""
Unit tests for exception handlers.

Tests cover:
- AppException handler response format and Bearer challenge
- Validation error handler formatting
- General exception handler (debug vs production)
- Rate limit handler response format
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded

from gatehouse.core.handlers import (
    app_exception_handler,
    general_exception_handler,
    rate_limit_handler,
    validation_exception_handler,
)
from gatehouse.exceptions import (
    AppException,
    AuthenticationError,
    BadRequestError,
    InternalError,
    NotFoundError,
    RateLimitExceededError,
)


@pytest.fixture
def mock_request() -> MagicMock:
    """Create a mock request with request_id in state."""
    request = MagicMock(spec=Request)
    request.state.request_id = "test-request-123"
    request.client.host = "127.0.0.1"
    return request


@pytest.fixture
def mock_request_no_id() -> MagicMock:
    """Create a mock request without request_id."""
    request = MagicMock(spec=Request)
    request.state = MagicMock(spec=[])
    request.client.host = "127.0.0.1"
    return request


class TestAppExceptionHandler:
    """Tests for app_exception_handler."""

    @pytest.mark.asyncio
    async def test_returns_exception_status_code(self, mock_request):
        response = await app_exception_handler(mock_request, NotFoundError(resource="User"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_envelope(self, mock_request):
        exc = AppException(
            message="Test error",
            status_code=400,
            error_code="TEST_ERROR",
            details={"field": "value"},
        )
        response = await app_exception_handler(mock_request, exc)

        body = json.loads(response.body)

        assert body["error"] == {
            "code": "TEST_ERROR",
            "message": "Test error",
            "details": {"field": "value"},
        }
        assert body["meta"]["request_id"] == "test-request-123"

    @pytest.mark.asyncio
    async def test_handles_missing_request_id(self, mock_request_no_id):
        response = await app_exception_handler(mock_request_no_id, NotFoundError())

        assert json.loads(response.body)["meta"]["request_id"] is None

    @pytest.mark.asyncio
    async def test_unauthorized_carries_bearer_challenge(self, mock_request):
        response = await app_exception_handler(mock_request, AuthenticationError())

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_other_errors_have_no_challenge(self, mock_request):
        response = await app_exception_handler(mock_request, BadRequestError("Email is already registered"))

        assert "WWW-Authenticate" not in response.headers

    @pytest.mark.asyncio
    async def test_internal_error_message_is_generic(self, mock_request):
        response = await app_exception_handler(mock_request, InternalError())

        body = json.loads(response.body)

        assert response.status_code == 500
        assert body["error"]["message"] == "Unexpected error, check server logs"


class TestValidationExceptionHandler:
    """Tests for validation_exception_handler."""

    @pytest.mark.asyncio
    async def test_formats_validation_errors(self, mock_request):
        exc = MagicMock(spec=RequestValidationError)
        exc.errors.return_value = [
            {"loc": ("body", "email"), "msg": "Invalid email", "type": "value_error"},
            {"loc": ("query", "limit"), "msg": "Too large", "type": "less_than_equal"},
        ]

        response = await validation_exception_handler(mock_request, exc)

        body = json.loads(response.body)

        assert response.status_code == 422
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"][0] == {
            "field": "body.email",
            "message": "Invalid email",
            "type": "value_error",
        }
        assert body["error"]["details"][1]["field"] == "query.limit"


class TestGeneralExceptionHandler:
    """Tests for general_exception_handler."""

    @pytest.mark.asyncio
    async def test_hides_details_in_production(self, mock_request):
        exc = RuntimeError("Sensitive database error")

        with patch("gatehouse.core.handlers.settings") as mock_settings:
            mock_settings.debug = False
            response = await general_exception_handler(mock_request, exc)

        body = json.loads(response.body)

        assert response.status_code == 500
        assert body["error"]["code"] == "INTERNAL_ERROR"
        assert "Sensitive" not in body["error"]["message"]

    @pytest.mark.asyncio
    async def test_shows_details_in_debug(self, mock_request):
        exc = RuntimeError("Debug error message")

        with patch("gatehouse.core.handlers.settings") as mock_settings:
            mock_settings.debug = True
            response = await general_exception_handler(mock_request, exc)

        assert json.loads(response.body)["error"]["message"] == "Debug error message"


class TestRateLimitHandler:
    """Tests for rate_limit_handler."""

    @pytest.mark.asyncio
    async def test_returns_429(self, mock_request):
        exc = MagicMock(spec=RateLimitExceeded)
        response = await rate_limit_handler(mock_request, exc)

        assert response.status_code == 429
        assert json.loads(response.body)["error"]["code"] == "RATE_LIMIT_EXCEEDED"

    @pytest.mark.asyncio
    async def test_renders_rate_limit_exception(self, mock_request):
        response = await rate_limit_handler(mock_request, MagicMock(spec=RateLimitExceeded))

        body = json.loads(response.body)

        assert body["error"]["message"] == RateLimitExceededError().message
        assert body["meta"]["request_id"] == "test-request-123"

    @pytest.mark.asyncio
    async def test_handles_missing_client(self):
        request = MagicMock(spec=Request)
        request.state.request_id = "test-123"
        request.client = None

        response = await rate_limit_handler(request, MagicMock(spec=RateLimitExceeded))

        assert response.status_code == 429
