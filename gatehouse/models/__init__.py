"""
Database models for Gatehouse.

This module exports all SQLAlchemy models and the declarative base.
Import models from this module to ensure proper initialization.
"""

from gatehouse.models.base import Base
from gatehouse.models.country import Country
from gatehouse.models.enums import ValidPermission
from gatehouse.models.mixins import TimestampMixin
from gatehouse.models.role import Permission, Role, role_permissions
from gatehouse.models.user import User

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Authorization models
    "Permission",
    "Role",
    "role_permissions",
    "ValidPermission",
    # Directory models
    "Country",
    "User",
]
