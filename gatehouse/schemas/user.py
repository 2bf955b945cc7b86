"""
User Pydantic schemas for API request/response handling.

This module provides:
- User update schema (partial, PATCH semantics)
- User response schemas, plain and with role/permissions
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from gatehouse.core.security import validate_password_strength


class UserUpdate(BaseModel):
    """
    Schema for updating user information.

    All fields are optional to support partial updates (PATCH).

    Attributes:
        email: New email address (must stay unique)
        full_name: New display name
        password: New password (stored as an Argon2id hash)
        origin_country: Name of the user's origin country
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = Field(default=None, description="New email address")
    full_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="New display name",
    )
    password: str | None = Field(
        default=None,
        min_length=8,
        max_length=128,
        description="New password (min 8 characters, upper, lower and digit)",
    )
    origin_country: str | None = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="Origin country name; an unknown name clears the country",
    )

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str | None) -> str | None:
        """Trim the display name; a blank name is treated as not provided."""
        if value is not None:
            value = value.strip()
            if not value:
                return None
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        """Validate password strength requirements."""
        if value is not None:
            is_valid, error_message = validate_password_strength(value)
            if not is_valid:
                raise ValueError(error_message)
        return value


class CountryResponse(BaseModel):
    """Country reference embedded in user responses."""

    id: uuid.UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class PermissionResponse(BaseModel):
    """Permission granted by a role."""

    id: uuid.UUID
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RoleResponse(BaseModel):
    """Role with its granted permissions."""

    id: uuid.UUID
    name: str
    description: str | None = None
    permissions: list[PermissionResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """
    Schema for user responses.

    The password hash is never part of any response.
    """

    id: uuid.UUID = Field(description="User's unique identifier (UUID)")
    email: str = Field(description="User's email address")
    full_name: str = Field(description="User's display name")
    is_active: bool = Field(description="False once the user has been deleted")
    country: CountryResponse | None = Field(default=None, description="Origin country")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class UserWithRoleResponse(UserResponse):
    """User with role and permissions, for administrative inspection."""

    role: RoleResponse = Field(description="The user's role and its permissions")
