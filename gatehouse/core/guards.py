"""
Authentication and authorization guard pipeline.

Each guarded operation runs two gates in a fixed order:

    authenticate(token) -> User      401 AuthenticationError on failure
    authorize(User, required)        403 InsufficientPermissionsError on failure

The pipeline is stateless. The caller's role and permissions are loaded from
the database on every request, never taken from the token or a cache.

This module has no FastAPI dependency; gatehouse.api.dependencies.auth()
attaches a pipeline to a route.
"""

import logging
import uuid
from collections.abc import Iterable
from typing import Protocol

from jose import JWTError

from gatehouse.core.security import TOKEN_TYPE_ACCESS, decode_token, verify_token_type
from gatehouse.exceptions import (
    AuthenticationError,
    InsufficientPermissionsError,
    InvalidTokenError,
)
from gatehouse.models.enums import ValidPermission
from gatehouse.models.user import User
from gatehouse.repositories.user_repository import UserRepository


class IdentityVerifier(Protocol):
    """Turns a presented credential into the id of the user it belongs to."""

    def verify(self, token: str) -> uuid.UUID:
        """
        Raises:
            InvalidTokenError: If the credential does not verify
        """
        ...


class JWTIdentityVerifier:
    """Verifies HS256 access tokens signed with settings.secret_key."""

    def verify(self, token: str) -> uuid.UUID:
        try:
            claims = decode_token(token)
        except JWTError:
            raise InvalidTokenError()

        if not verify_token_type(claims, TOKEN_TYPE_ACCESS):
            raise InvalidTokenError("Invalid token type")

        subject = claims.get("sub")
        if not subject:
            raise InvalidTokenError("Invalid token payload")

        try:
            return uuid.UUID(str(subject))
        except ValueError:
            raise InvalidTokenError("Invalid token payload")


class Authenticator:
    """
    First gate: resolves the caller from a bearer token.

    Args:
        verifier: Identity verifier for the presented token
        user_repo: Repository used to load the caller with role and permissions
        logger: Logger for rejected attempts
    """

    def __init__(
        self,
        verifier: IdentityVerifier,
        user_repo: UserRepository,
        logger: logging.Logger | None = None,
    ):
        self.verifier = verifier
        self.user_repo = user_repo
        self.logger = logger or logging.getLogger(__name__)

    async def authenticate(self, token: str | None) -> User:
        """
        Resolve the active user behind token.

        Raises:
            AuthenticationError: Missing token, unknown or inactive user
            InvalidTokenError: Token fails verification
        """
        if not token:
            self.logger.warning("Authentication failed: missing Bearer token")
            raise AuthenticationError("Missing authentication credentials")

        try:
            user_id = self.verifier.verify(token)
        except InvalidTokenError as e:
            self.logger.warning(f"Authentication failed: {e.message}")
            raise

        user = await self.user_repo.get_with_privileges(user_id)
        if user is None:
            self.logger.warning(f"Authentication failed: user not found - {user_id}")
            raise AuthenticationError("User not found")

        if not user.is_active:
            self.logger.warning(f"Authentication failed: inactive user - {user_id}")
            raise AuthenticationError("User is inactive, talk with an admin")

        return user


class Authorizer:
    """
    Second gate: checks the caller's role against a required permission set.

    The requirement is satisfied when the role grants at least one of the
    required permissions. An empty requirement admits any authenticated user.

    Raises:
        ValueError: At construction, if a required token is not in the catalog
    """

    def __init__(
        self,
        required: Iterable[ValidPermission | str] = (),
        logger: logging.Logger | None = None,
    ):
        self.required = frozenset(ValidPermission.parse(token) for token in required)
        self.logger = logger or logging.getLogger(__name__)

    def authorize(self, user: User) -> None:
        if not self.required:
            return

        granted = user.role.permission_names
        if granted.isdisjoint(permission.value for permission in self.required):
            needed = ", ".join(sorted(permission.value for permission in self.required))
            self.logger.warning(
                f"Access denied: user {user.id} with role {user.role.name} "
                f"needs one of [{needed}]"
            )
            raise InsufficientPermissionsError(
                f"User {user.full_name} needs a valid permission: [{needed}]"
            )


class GuardPipeline:
    """
    Ordered authenticate -> authorize chain for one operation.

    Example:
        pipeline = GuardPipeline(
            Authenticator(JWTIdentityVerifier(), UserRepository(session)),
            Authorizer([ValidPermission.read]),
        )
        caller = await pipeline.run(token)
    """

    def __init__(self, authenticator: Authenticator, authorizer: Authorizer):
        self.authenticator = authenticator
        self.authorizer = authorizer

    async def run(self, token: str | None) -> User:
        user = await self.authenticator.authenticate(token)
        self.authorizer.authorize(user)
        return user
