"""
Database repositories for Gatehouse.

This module exports all repository classes for database operations.
"""

from gatehouse.repositories.base import BaseRepository
from gatehouse.repositories.reference_repository import (
    CountryRepository,
    PermissionRepository,
    RoleRepository,
)
from gatehouse.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CountryRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]
