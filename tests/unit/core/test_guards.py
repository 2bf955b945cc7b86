"""
Unit tests for the authentication/authorization guard pipeline.

The user repository is mocked; tokens are real HS256 tokens.
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from gatehouse.core.guards import (
    Authenticator,
    Authorizer,
    GuardPipeline,
    JWTIdentityVerifier,
)
from gatehouse.core.security import create_access_token
from gatehouse.exceptions import (
    AuthenticationError,
    InsufficientPermissionsError,
    InvalidTokenError,
)
from gatehouse.models.enums import ValidPermission
from gatehouse.models.role import Permission, Role
from gatehouse.models.user import User


def make_user(*permissions: str, is_active: bool = True, full_name: str = "Jane Doe") -> User:
    role = Role(
        id=uuid.uuid4(),
        name="custom",
        permissions=[Permission(id=uuid.uuid4(), name=name) for name in permissions],
    )
    return User(
        id=uuid.uuid4(),
        email="jane@example.com",
        full_name=full_name,
        password_hash="$argon2id$...",
        is_active=is_active,
        role=role,
    )


@pytest.fixture
def mock_user_repo():
    return AsyncMock()


@pytest.fixture
def authenticator(mock_user_repo):
    return Authenticator(JWTIdentityVerifier(), mock_user_repo)


class TestJWTIdentityVerifier:
    def test_returns_subject_as_uuid(self):
        user_id = uuid.uuid4()
        token = create_access_token({"sub": str(user_id)})

        assert JWTIdentityVerifier().verify(token) == user_id

    def test_rejects_garbage(self):
        with pytest.raises(InvalidTokenError):
            JWTIdentityVerifier().verify("not.a.token")

    def test_rejects_expired_token(self):
        token = create_access_token(
            {"sub": str(uuid.uuid4())}, expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(InvalidTokenError):
            JWTIdentityVerifier().verify(token)

    def test_rejects_non_uuid_subject(self):
        token = create_access_token({"sub": "42"})

        with pytest.raises(InvalidTokenError, match="Invalid token payload"):
            JWTIdentityVerifier().verify(token)


class TestAuthenticator:
    """Tests for the first gate."""

    @pytest.mark.asyncio
    async def test_missing_token(self, authenticator, mock_user_repo):
        with pytest.raises(AuthenticationError) as exc_info:
            await authenticator.authenticate(None)

        assert exc_info.value.status_code == 401
        mock_user_repo.get_with_privileges.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user(self, authenticator, mock_user_repo):
        mock_user_repo.get_with_privileges.return_value = None
        token = create_access_token({"sub": str(uuid.uuid4())})

        with pytest.raises(AuthenticationError, match="User not found"):
            await authenticator.authenticate(token)

    @pytest.mark.asyncio
    async def test_inactive_user(self, authenticator, mock_user_repo):
        user = make_user("read", is_active=False)
        mock_user_repo.get_with_privileges.return_value = user
        token = create_access_token({"sub": str(user.id)})

        with pytest.raises(AuthenticationError, match="inactive"):
            await authenticator.authenticate(token)

    @pytest.mark.asyncio
    async def test_active_user_is_returned(self, authenticator, mock_user_repo):
        user = make_user("read")
        mock_user_repo.get_with_privileges.return_value = user
        token = create_access_token({"sub": str(user.id)})

        result = await authenticator.authenticate(token)

        assert result is user
        mock_user_repo.get_with_privileges.assert_awaited_once_with(user.id)

    @pytest.mark.asyncio
    async def test_uses_injected_verifier(self, mock_user_repo):
        user = make_user("read")
        verifier = MagicMock()
        verifier.verify.return_value = user.id
        mock_user_repo.get_with_privileges.return_value = user

        result = await Authenticator(verifier, mock_user_repo).authenticate("opaque")

        assert result is user
        verifier.verify.assert_called_once_with("opaque")


class TestAuthorizer:
    """Tests for the second gate."""

    def test_unknown_requirement_fails_at_construction(self):
        with pytest.raises(ValueError):
            Authorizer(["raed"])

    def test_empty_requirement_admits_any_user(self):
        Authorizer().authorize(make_user())

    def test_any_overlap_is_enough(self):
        authorizer = Authorizer([ValidPermission.write, ValidPermission.administrator])

        authorizer.authorize(make_user("read", "write"))

    def test_disjoint_permissions_are_rejected(self):
        authorizer = Authorizer([ValidPermission.write])

        with pytest.raises(InsufficientPermissionsError) as exc_info:
            authorizer.authorize(make_user("read", full_name="Reader"))

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "User Reader needs a valid permission: [write]"

    def test_role_without_permissions_is_rejected(self):
        with pytest.raises(InsufficientPermissionsError):
            Authorizer([ValidPermission.read]).authorize(make_user())

    def test_requirement_is_frozen(self):
        authorizer = Authorizer(["read", ValidPermission.read])

        assert authorizer.required == frozenset({ValidPermission.read})


class TestGuardPipeline:
    @pytest.mark.asyncio
    async def test_authentication_runs_before_authorization(self):
        authenticator = AsyncMock()
        authenticator.authenticate.side_effect = AuthenticationError()
        authorizer = MagicMock()

        with pytest.raises(AuthenticationError):
            await GuardPipeline(authenticator, authorizer).run(None)

        authorizer.authorize.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_authorized_user(self):
        user = make_user("delete")
        authenticator = AsyncMock()
        authenticator.authenticate.return_value = user

        result = await GuardPipeline(authenticator, Authorizer([ValidPermission.delete])).run("t")

        assert result is user
