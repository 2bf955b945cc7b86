"""
Exception handlers for the FastAPI application.

Every failure leaves the service in the same envelope:
    {"error": {"code", "message", "details"}, "meta": {"request_id"}}
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from gatehouse.core.config import settings
from gatehouse.exceptions import AppException, RateLimitExceededError

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict | list | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details if details is not None else {},
            },
            "meta": {
                "request_id": _request_id(request),
            },
        },
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle custom application exceptions.

    401 responses carry a Bearer challenge.
    """
    logger.warning(
        f"Application exception: {exc.error_code} - {exc.message} "
        f"(request_id={_request_id(request) or 'unknown'})"
    )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return _error_response(
        request,
        exc.status_code,
        exc.error_code,
        exc.message,
        exc.details,
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors for path, query and body input."""
    logger.warning(
        f"Validation error: {exc.errors()} "
        f"(request_id={_request_id(request) or 'unknown'})"
    )

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        errors,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    The full error goes to the logs; the client only sees a generic message
    unless debug is enabled.
    """
    logger.error(
        f"Unexpected error: {str(exc)} "
        f"(request_id={_request_id(request) or 'unknown'})",
        exc_info=True,
    )

    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        str(exc) if settings.debug else "Unexpected error, check server logs",
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    logger.warning(
        f"Rate limit exceeded: {request.client.host if request.client else 'unknown'} "
        f"(request_id={_request_id(request) or 'unknown'})"
    )

    error = RateLimitExceededError()
    return _error_response(
        request,
        error.status_code,
        error.error_code,
        error.message,
        error.details,
    )
