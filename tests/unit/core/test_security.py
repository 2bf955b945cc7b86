"""
Unit tests for password hashing and JWT helpers.
"""

import uuid

import pytest
from jose import JWTError, jwt

from gatehouse.core.config import settings
from gatehouse.core.security import (
    ALGORITHM,
    TOKEN_TYPE_ACCESS,
    create_access_token,
    decode_token,
    hash_password,
    pwd_hasher,
    validate_password_strength,
    verify_token_type,
)


class TestPasswordHashing:
    def test_hash_is_argon2id_and_verifies(self):
        hashed = hash_password("Secret123")

        assert hashed.startswith("$argon2id$")
        assert pwd_hasher.verify(hashed, "Secret123")

    def test_same_password_hashes_differently(self):
        assert hash_password("Secret123") != hash_password("Secret123")


class TestPasswordStrength:
    @pytest.mark.parametrize(
        "password,fragment",
        [
            ("Ab1", "at least 8 characters"),
            ("lowercase123", "uppercase"),
            ("UPPERCASE123", "lowercase"),
            ("NoDigitsHere", "digit"),
        ],
    )
    def test_weak_passwords(self, password, fragment):
        is_valid, message = validate_password_strength(password)

        assert is_valid is False
        assert fragment in message

    def test_strong_password(self):
        assert validate_password_strength("Strong123") == (True, None)


class TestTokens:
    def test_access_token_claims(self):
        subject = str(uuid.uuid4())
        claims = decode_token(create_access_token({"sub": subject}))

        assert claims["sub"] == subject
        assert verify_token_type(claims, TOKEN_TYPE_ACCESS)
        assert {"exp", "iat", "jti"} <= claims.keys()

    def test_token_signed_with_other_key_is_rejected(self):
        token = jwt.encode({"sub": "x"}, "another-secret-key-of-sufficient-length", algorithm=ALGORITHM)

        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_token_type(self):
        token = jwt.encode({"sub": "x", "type": "refresh"}, settings.secret_key, algorithm=ALGORITHM)

        assert verify_token_type(decode_token(token), TOKEN_TYPE_ACCESS) is False
