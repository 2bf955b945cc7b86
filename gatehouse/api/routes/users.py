"""
User directory API routes.

This module provides:
- GET /api/v1/user - List active users (read)
- GET /api/v1/user/{term} - Find a user by id, email or display name (read)
- GET /api/v1/user/role/{term} - Find a user with role and permissions (administrator)
- PATCH /api/v1/user/{user_id} - Update a user (write)
- DELETE /api/v1/user/{user_id} - Deactivate a user (delete)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Query

from gatehouse.api.dependencies import (
    AdministratorUser,
    DeleteUser,
    ReadUser,
    UserServiceDep,
    WriteUser,
)
from gatehouse.schemas.common import MessageResponse, PaginationParams
from gatehouse.schemas.user import UserResponse, UserUpdate, UserWithRoleResponse

router = APIRouter(prefix="/user", tags=["User"])

AUTH_RESPONSES = {
    401: {"description": "Unauthorized, token not valid"},
    403: {"description": "Forbidden, missing permission"},
}


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="A user with read permission can list active users",
    responses={**AUTH_RESPONSES, 404: {"description": "No users on this page"}},
)
async def list_users(
    current_user: ReadUser,
    user_service: UserServiceDep,
    pagination: Annotated[PaginationParams, Query()],
) -> list[UserResponse]:
    """
    List active users with their origin country.

    Query parameters:
        - limit: Page size (default: 10, max: 100)
        - offset: Users to skip (default: 0)

    Raises:
        - 404 Not Found: If the requested page is empty
    """
    return await user_service.list_users(pagination)


@router.get(
    "/role/{term}",
    response_model=UserWithRoleResponse,
    summary="Get user with role and permissions",
    description=(
        "A user with administrator permission can get a user with their role "
        "and permissions. Search by id, email or display name."
    ),
    responses={**AUTH_RESPONSES, 404: {"description": "User not found"}},
)
async def get_user_with_role(
    term: str,
    current_user: AdministratorUser,
    user_service: UserServiceDep,
) -> UserWithRoleResponse:
    """Find a user with role and permissions by id, email or display name."""
    return await user_service.find_user_with_role(term)


@router.get(
    "/{term}",
    response_model=UserResponse,
    summary="Get user",
    description="A user with read permission can get a user by id, email or display name",
    responses={**AUTH_RESPONSES, 404: {"description": "User not found"}},
)
async def get_user(
    term: str,
    current_user: ReadUser,
    user_service: UserServiceDep,
) -> UserResponse:
    """Find an active user by id, email or display name."""
    return await user_service.find_user(term)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="A user with write permission can update a user by id",
    responses={
        **AUTH_RESPONSES,
        400: {"description": "Email already registered"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)
async def update_user(
    user_id: uuid.UUID,
    update_data: UserUpdate,
    current_user: WriteUser,
    user_service: UserServiceDep,
) -> UserResponse:
    """
    Update a user.

    Request body (all optional):
        - email: New email address (must be unique)
        - full_name: New display name
        - password: New password
        - origin_country: Country name; an unknown name clears the country
    """
    return await user_service.update_user(user_id, update_data)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
    description="A user with delete permission can deactivate a user by id",
    responses={**AUTH_RESPONSES, 404: {"description": "User not found"}},
)
async def delete_user(
    user_id: uuid.UUID,
    current_user: DeleteUser,
    user_service: UserServiceDep,
) -> MessageResponse:
    """
    Deactivate (soft delete) a user.

    Deleting an already deactivated user succeeds again.
    """
    return await user_service.deactivate_user(user_id)
