"""
Reference data seeding.

Inserts the permission catalog, the flat roles and the country list. Safe to
run repeatedly: rows that already exist (matched by name) are left alone.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.models.country import Country
from gatehouse.models.enums import ValidPermission
from gatehouse.models.role import Permission, Role
from gatehouse.repositories.reference_repository import (
    CountryRepository,
    PermissionRepository,
    RoleRepository,
)
from gatehouse.schemas.seed import SeedResponse

PERMISSION_DESCRIPTIONS: dict[ValidPermission, str] = {
    ValidPermission.read: "View users and their origin country",
    ValidPermission.write: "Update users and run the seed",
    ValidPermission.delete: "Deactivate users",
    ValidPermission.administrator: "Inspect user roles and permissions",
}

# role name -> (description, granted permissions)
ROLES: dict[str, tuple[str, tuple[ValidPermission, ...]]] = {
    "user": ("Read-only access to the directory", (ValidPermission.read,)),
    "admin": (
        "Day-to-day user administration",
        (ValidPermission.read, ValidPermission.write, ValidPermission.delete),
    ),
    "super-admin": ("Full access", tuple(ValidPermission)),
}

COUNTRIES: tuple[str, ...] = (
    "Argentina", "Australia", "Austria", "Belgium", "Bolivia", "Brazil",
    "Canada", "Chile", "China", "Colombia", "Costa Rica", "Cuba",
    "Denmark", "Dominican Republic", "Ecuador", "Egypt", "El Salvador",
    "Finland", "France", "Germany", "Greece", "Guatemala", "Honduras",
    "India", "Ireland", "Italy", "Japan", "Mexico", "Morocco",
    "Netherlands", "New Zealand", "Nicaragua", "Nigeria", "Norway",
    "Panama", "Paraguay", "Peru", "Poland", "Portugal", "Puerto Rico",
    "South Africa", "South Korea", "Spain", "Sweden", "Switzerland",
    "United Kingdom", "United States", "Uruguay", "Venezuela",
)


class SeedService:
    """
    Service that populates permissions, roles and countries.

    Args:
        session: Async database session
        logger: Logger to report through, defaults to this module's logger
    """

    def __init__(self, session: AsyncSession, logger: logging.Logger | None = None):
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.permission_repo = PermissionRepository(session)
        self.role_repo = RoleRepository(session)
        self.country_repo = CountryRepository(session)

    async def run_seed(self) -> SeedResponse:
        """
        Insert any missing reference rows and commit.

        Returns:
            SeedResponse with the number of rows created per table
        """
        permissions = await self.permission_repo.get_by_names()
        permissions_created = 0
        for token in ValidPermission:
            if token.value not in permissions:
                permissions[token.value] = await self.permission_repo.add(
                    Permission(name=token.value, description=PERMISSION_DESCRIPTIONS[token])
                )
                permissions_created += 1

        roles_created = 0
        for name, (description, granted) in ROLES.items():
            if await self.role_repo.get_by_name(name) is None:
                await self.role_repo.add(
                    Role(
                        name=name,
                        description=description,
                        permissions=[permissions[token.value] for token in granted],
                    )
                )
                roles_created += 1

        existing_countries = await self.country_repo.get_names()
        countries_created = 0
        for name in COUNTRIES:
            if name not in existing_countries:
                await self.country_repo.add(Country(name=name))
                countries_created += 1

        await self.session.commit()

        self.logger.info(
            f"Seed executed: permissions={permissions_created}, "
            f"roles={roles_created}, countries={countries_created}"
        )

        return SeedResponse(
            permissions_created=permissions_created,
            roles_created=roles_created,
            countries_created=countries_created,
        )
