"""
User repository for user-specific database operations.

This module owns query construction against the users table and its
relations. Relations are declared lazy="raise" on the models, so every query
that needs Country, Role or Permission rows joins them here explicitly and
populates the relationship with contains_eager().
"""

import uuid
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from gatehouse.models.country import Country
from gatehouse.models.role import Permission, Role
from gatehouse.models.user import User
from gatehouse.repositories.base import BaseRepository
from gatehouse.services.identifier_classifier import UserLookup


class UserRepository(BaseRepository[User]):
    """
    Repository for User model operations.

    Extends BaseRepository with directory queries:
    - Paged listing of active users with their country
    - Single lookups by id, email or display name
    - Privilege-expanded lookups (role and permissions joined)
    """

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    def _with_country(self) -> Select[Any]:
        """Users left-joined with their (optional) country."""
        return (
            select(User)
            .outerjoin(User.country)
            .options(contains_eager(User.country))
            .execution_options(populate_existing=True)
        )

    def _with_privileges(self) -> Select[Any]:
        """
        Users with country, role and granted permissions.

        The role join is an inner join: a user whose role row is missing
        produces no result rather than a partially populated user.
        """
        return (
            select(User)
            .outerjoin(User.country)
            .join(User.role)
            .outerjoin(Role.permissions)
            .options(
                contains_eager(User.country),
                contains_eager(User.role).contains_eager(Role.permissions),
            )
            .order_by(Permission.name)
            .execution_options(populate_existing=True)
        )

    async def list_active(self, limit: int = 10, offset: int = 0) -> list[User]:
        """
        Get one page of active users with their country.

        Ordered by creation time, then id, so pages are stable across calls.

        Args:
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            List of active users (possibly empty)
        """
        query = self._apply_active_filter(self._with_country())
        query = query.order_by(User.created_at, User.id).offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_one(
        self,
        lookup: UserLookup,
        expanded: bool = False,
        include_inactive: bool = False,
    ) -> User | None:
        """
        Run a classified lookup.

        Args:
            lookup: Output of identifier_classifier.classify()
            expanded: Also join the user's role and its permissions
            include_inactive: Match soft-deleted users too

        Returns:
            The matching user, or None (always None for an unresolvable lookup)
        """
        if not lookup.is_resolvable:
            return None

        query = self._with_privileges() if expanded else self._with_country()
        query = query.where(lookup.predicate())
        if not include_inactive:
            query = self._apply_active_filter(query)

        result = await self.session.execute(query)
        return result.unique().scalars().first()

    async def get_with_country(self, user_id: uuid.UUID) -> User | None:
        """Get user by ID (active or not) with country populated."""
        query = self._with_country().where(User.id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_with_privileges(self, user_id: uuid.UUID) -> User | None:
        """
        Get user by ID with role and permissions populated.

        Used by the authentication stage, so authorization always works from
        freshly loaded role data. Inactive users are returned; the caller
        decides what inactivity means.
        """
        query = self._with_privileges().where(User.id == user_id)
        result = await self.session.execute(query)
        return result.unique().scalar_one_or_none()
