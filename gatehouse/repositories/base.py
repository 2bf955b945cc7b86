"""
Base repository with generic CRUD operations.

This module provides a generic repository pattern for database operations.
All specific repositories should inherit from BaseRepository.

Type Parameters:
    ModelType: The SQLAlchemy model class (e.g., User, Role, etc.)
"""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository for database operations.

    Models carrying an ``is_active`` column can have inactive rows filtered
    out with _apply_active_filter().

    Usage:
        class CountryRepository(BaseRepository[Country]):
            def __init__(self, session: AsyncSession):
                super().__init__(Country, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    def _apply_active_filter(self, query: Select[Any]) -> Select[Any]:
        """
        Restrict query to active rows if the model supports soft deletion.

        Args:
            query: SQLAlchemy select statement

        Returns:
            Query with the is_active filter applied
        """
        if hasattr(self.model, "is_active"):
            query = query.where(self.model.is_active.is_(True))
        return query

    async def add(self, instance: ModelType) -> ModelType:
        """
        Persist a model instance.

        Returns:
            Persisted model instance (with ID and timestamps populated)
        """
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def get_by_id(self, id: uuid.UUID) -> ModelType | None:
        """
        Get a record by ID, active or not.

        Example:
            user = await user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User")
        """
        return await self.session.get(self.model, id)

    async def update(self, instance: ModelType) -> ModelType:
        """
        Persist changes to an already-modified model instance.

        The caller is responsible for modifying the instance attributes
        before calling this method. This method only flushes.

        Example:
            user = await user_repo.get_by_id(user_id)
            user.full_name = "New Name"
            user = await user_repo.update(user)
        """
        await self.session.flush()
        return instance

