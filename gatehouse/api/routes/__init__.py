"""
API routes for Gatehouse.

This package contains all API endpoint definitions organized by feature.
"""

from gatehouse.api.routes import health, seed, users

__all__ = ["health", "seed", "users"]
