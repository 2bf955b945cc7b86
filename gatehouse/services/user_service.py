"""
User directory service: listing, lookup, update and deactivation.

This module provides:
- Paged listing of active users (an empty page is reported as NotFound)
- Lookup by free-text term (id, email or display name)
- Lookup with role and permissions for administrative inspection
- Partial updates, including origin country resolution
- Soft deletion (deactivation)
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.core.security import hash_password
from gatehouse.exceptions import BadRequestError, InternalError, NotFoundError
from gatehouse.models.user import User
from gatehouse.repositories.reference_repository import CountryRepository
from gatehouse.repositories.user_repository import UserRepository
from gatehouse.schemas.common import MessageResponse, PaginationParams
from gatehouse.schemas.user import UserResponse, UserUpdate, UserWithRoleResponse
from gatehouse.services.identifier_classifier import classify


class UserService:
    """
    Service class for user directory operations.

    Permission checks happen before any method here is called (see
    gatehouse.core.guards); this class only enforces data invariants.

    Args:
        session: Async database session for the current request
        logger: Logger to report through, defaults to this module's logger
    """

    def __init__(self, session: AsyncSession, logger: logging.Logger | None = None):
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.user_repo = UserRepository(session)
        self.country_repo = CountryRepository(session)

    async def list_users(self, pagination: PaginationParams) -> list[UserResponse]:
        """
        List one page of active users with their country.

        Raises:
            NotFoundError: If the page is empty. Callers get 404 rather than
                an empty list, matching the established API contract.
        """
        users = await self.user_repo.list_active(
            limit=pagination.limit,
            offset=pagination.offset,
        )

        if not users:
            self.logger.info(
                f"No active users for limit={pagination.limit} offset={pagination.offset}"
            )
            raise NotFoundError(message="Users not found")

        return [UserResponse.model_validate(user) for user in users]

    async def find_user(self, term: str) -> UserResponse:
        """
        Find an active user by id, email or display name.

        Raises:
            NotFoundError: If nothing matches or the term is unresolvable
        """
        user = await self.user_repo.find_one(classify(term))
        if user is None:
            raise NotFoundError(message=f'User with search term: "{term}" not found')
        return UserResponse.model_validate(user)

    async def find_user_with_role(self, term: str) -> UserWithRoleResponse:
        """
        Find an active user by id, email or display name, with role and permissions.

        Raises:
            NotFoundError: If nothing matches, the term is unresolvable, or
                the user's role row is missing
        """
        user = await self.user_repo.find_one(classify(term), expanded=True)
        if user is None:
            raise NotFoundError(message=f'User with search term: "{term}" not found')
        return UserWithRoleResponse.model_validate(user)

    async def update_user(self, user_id: uuid.UUID, update_data: UserUpdate) -> UserResponse:
        """
        Apply a partial update to a user.

        The origin country, when given, is resolved and committed on its own
        before the remaining fields. An unknown country name clears the
        reference. The two commits are not atomic: if the second fails the
        country change stays.

        Raises:
            NotFoundError: If the user does not exist
            BadRequestError: If the update breaks a uniqueness constraint
            InternalError: On any other persistence failure
        """
        changes = {
            field: value
            for field, value in update_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        origin_country = changes.pop("origin_country", None)

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            self.logger.warning(f"User {user_id} not found")
            raise NotFoundError(message=f"User with id: {user_id} not found")

        if origin_country:
            country = await self.country_repo.get_by_name(origin_country)
            if country is None:
                self.logger.info(f"Country {origin_country!r} not found, clearing user {user_id} country")
            user.country_id = country.id if country else None
            await self._persist(user)

        updated_fields = sorted(changes)
        password = changes.pop("password", None)
        if password:
            user.password_hash = hash_password(password)
        for field, value in changes.items():
            setattr(user, field, value)
        await self._persist(user)

        self.logger.info(f"User {user_id} updated: fields={updated_fields}")

        updated = await self.user_repo.get_with_country(user_id)
        return UserResponse.model_validate(updated)

    async def deactivate_user(self, user_id: uuid.UUID) -> MessageResponse:
        """
        Soft delete a user by flipping is_active to False.

        Idempotent: deactivating an inactive user succeeds again.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            self.logger.warning(f"User {user_id} not found, can't delete")
            raise NotFoundError(message=f"User with id: {user_id} not found, can't delete")

        user.is_active = False
        await self._persist(user)

        message = f"User with id: {user_id} deleted successfully"
        self.logger.info(message)
        return MessageResponse(message=message)

    async def _persist(self, user: User) -> None:
        """
        Flush and commit pending changes to user.

        Raises:
            BadRequestError: On a constraint violation
            InternalError: On any other database error (details logged only)
        """
        user_id = user.id
        try:
            await self.user_repo.update(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            self.logger.warning(f"Integrity error updating user {user_id}: {e.orig}")
            if "email" in str(e.orig).lower():
                raise BadRequestError("Email is already registered")
            raise BadRequestError("Update conflicts with an existing user")
        except SQLAlchemyError:
            await self.session.rollback()
            self.logger.error(f"Database error updating user {user_id}", exc_info=True)
            raise InternalError()
