"""
FastAPI application entry point.

This module sets up:
- FastAPI application with middleware
- Exception handlers
- Rate limiting
- API routes
- CORS configuration
"""

import logging

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from gatehouse.api.routes import health, seed, users
from gatehouse.core.config import settings
from gatehouse.core.handlers import (
    app_exception_handler,
    general_exception_handler,
    rate_limit_handler,
    validation_exception_handler,
)
from gatehouse.core.lifespan import lifespan
from gatehouse.core.logging import setup_logging
from gatehouse.core.middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from gatehouse.core.rate_limit import limiter
from gatehouse.exceptions import AppException

setup_logging()
logger = logging.getLogger(__name__)


# ============================================================================
# FastAPI Application
# ============================================================================
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description=settings.description,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter


# ============================================================================
# Exception Handlers
# ============================================================================
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_exception_handler(Exception, general_exception_handler)


# ============================================================================
# Middleware Setup (last added runs first)
# ============================================================================
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)
app.add_middleware(RequestLoggingMiddleware)
# Outside the logging middleware so request logs carry the correlation id
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# API Routes
# ============================================================================
v1_router = APIRouter(prefix="/v1")
v1_router.include_router(users.router)
v1_router.include_router(seed.router)

api_router = APIRouter(prefix="/api")
api_router.include_router(v1_router)

app.include_router(health.router)
app.include_router(api_router)


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "gatehouse.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
