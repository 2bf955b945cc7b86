"""
Security utilities for credential handling.

This module provides:
- Password hashing with Argon2id (for password changes applied through updates)
- Password strength validation
- JWT access token encoding and validation

Token issuance belongs to the external identity provider; create_access_token
exists so that provider and the test suite share one token format.
"""

import logging
import re
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from argon2 import PasswordHasher
from jose import JWTError, jwt

from gatehouse.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# Password Hashing with Argon2id
# =============================================================================

pwd_hasher = PasswordHasher(
    time_cost=settings.argon2_time_cost,
    memory_cost=settings.argon2_memory_cost,
    parallelism=settings.argon2_parallelism,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: Plain text password to hash

    Returns:
        Argon2id hash string (includes algorithm, parameters, salt, and hash)
    """
    return pwd_hasher.hash(password)


def validate_password_strength(password: str) -> tuple[bool, str | None]:
    """
    Validate password strength against security requirements.

    Requirements:
    - Minimum 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 digit

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_password_strength("weak")
        (False, "Password must be at least 8 characters long")
        >>> validate_password_strength("Strong123")
        (True, None)
    """
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"

    if not re.search(r"[A-Z]", password):
        return False, "Password must contain at least one uppercase letter"

    if not re.search(r"[a-z]", password):
        return False, "Password must contain at least one lowercase letter"

    if not re.search(r"\d", password):
        return False, "Password must contain at least one digit"

    return True, None


# =============================================================================
# JWT Token Management
# =============================================================================

ALGORITHM = "HS256"

TOKEN_TYPE_ACCESS = "access"


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary of claims to encode in the token.
              Must contain 'sub' (the user id as a string)
        expires_delta: Optional custom expiration time. If None,
                      uses settings.access_token_expire_minutes

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token({"sub": str(user.id)})
    """
    to_encode = data.copy()
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode.update(
        {
            "exp": expire,
            "iat": now,
            "type": TOKEN_TYPE_ACCESS,
            "jti": str(uuid.uuid4()),
        }
    )

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Verifies signature, expiration and format.

    Raises:
        JWTError: If token is invalid, expired, or malformed
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise


def verify_token_type(token_data: dict[str, Any], expected_type: str) -> bool:
    """Check that decoded claims carry the expected token type."""
    return token_data.get("type") == expected_type
