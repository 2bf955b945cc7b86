"""
Core module for Gatehouse.

Exports the main configuration.
"""

from gatehouse.core.config import settings

__all__ = [
    # Config
    "settings",
]
