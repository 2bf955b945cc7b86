"""
Repositories for seeded reference data: countries, roles and permissions.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.models.country import Country
from gatehouse.models.role import Permission, Role
from gatehouse.repositories.base import BaseRepository


class CountryRepository(BaseRepository[Country]):
    """Repository for Country lookups."""

    def __init__(self, session: AsyncSession):
        super().__init__(Country, session)

    async def get_by_name(self, name: str) -> Country | None:
        """
        Get country by exact name.

        Example:
            country = await country_repo.get_by_name("Spain")
        """
        result = await self.session.execute(select(Country).where(Country.name == name))
        return result.scalar_one_or_none()

    async def get_names(self) -> set[str]:
        result = await self.session.execute(select(Country.name))
        return set(result.scalars().all())


class PermissionRepository(BaseRepository[Permission]):
    """Repository for Permission rows."""

    def __init__(self, session: AsyncSession):
        super().__init__(Permission, session)

    async def get_by_names(self) -> dict[str, Permission]:
        """All permissions keyed by name."""
        result = await self.session.execute(select(Permission))
        return {permission.name: permission for permission in result.scalars().all()}


class RoleRepository(BaseRepository[Role]):
    """Repository for Role rows."""

    def __init__(self, session: AsyncSession):
        super().__init__(Role, session)

    async def get_by_name(self, name: str) -> Role | None:
        """
        Get role by name.

        Example:
            admin_role = await role_repo.get_by_name("admin")
        """
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()
