"""
FastAPI dependencies for authentication and authorization.

This module provides:
- auth(*permissions): declarative guard attached per route
- Service dependencies bound to the request's database session

Usage:
    ReadUser = Annotated[User, Depends(auth(ValidPermission.read))]

    @router.get("/user")
    async def list_users(current_user: ReadUser, ...):
        ...
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.core.database import get_db
from gatehouse.core.guards import (
    Authenticator,
    Authorizer,
    GuardPipeline,
    JWTIdentityVerifier,
)
from gatehouse.models.enums import ValidPermission
from gatehouse.models.user import User
from gatehouse.repositories.user_repository import UserRepository
from gatehouse.services.seed_service import SeedService
from gatehouse.services.user_service import UserService

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI - this adds the padlock icon
security = HTTPBearer(
    scheme_name="Bearer",
    description="Enter your JWT access token",
    auto_error=False,
)

identity_verifier = JWTIdentityVerifier()


def auth(*permissions: ValidPermission | str) -> Callable[..., Awaitable[User]]:
    """
    Build the guard dependency for an operation.

    The required permissions are checked against the catalog here, when the
    route module is imported, so a misspelled requirement stops the app from
    starting. At request time the returned dependency authenticates the
    bearer token, then authorizes the caller's freshly loaded role.

    Args:
        *permissions: Required permissions; the caller needs at least one.
            None at all admits any authenticated user.

    Returns:
        Dependency resolving to the authenticated User

    Raises:
        ValueError: If a permission is not a ValidPermission token
    """
    authorizer = Authorizer(permissions, logger=logger)

    async def guard(
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
        db: AsyncSession = Depends(get_db),
    ) -> User:
        authenticator = Authenticator(identity_verifier, UserRepository(db), logger=logger)
        pipeline = GuardPipeline(authenticator, authorizer)
        return await pipeline.run(credentials.credentials if credentials else None)

    return guard


# ============================================================================
# Service Dependencies
# ============================================================================


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """
    Dependency to get UserService instance.

    Args:
        db: Database session

    Returns:
        UserService instance
    """
    return UserService(db)


def get_seed_service(db: AsyncSession = Depends(get_db)) -> SeedService:
    """
    Dependency to get SeedService instance.

    Args:
        db: Database session

    Returns:
        SeedService instance
    """
    return SeedService(db)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
SeedServiceDep = Annotated[SeedService, Depends(get_seed_service)]

# Per-operation guards
ReadUser = Annotated[User, Depends(auth(ValidPermission.read))]
WriteUser = Annotated[User, Depends(auth(ValidPermission.write))]
DeleteUser = Annotated[User, Depends(auth(ValidPermission.delete))]
AdministratorUser = Annotated[User, Depends(auth(ValidPermission.administrator))]
