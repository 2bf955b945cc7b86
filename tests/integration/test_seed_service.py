"""
Integration tests for reference data seeding.
"""

import pytest
from sqlalchemy import func, select

from gatehouse.models import Country, Permission, Role
from gatehouse.services.seed_service import COUNTRIES, SeedService


class TestRunSeed:
    @pytest.mark.asyncio
    async def test_first_run_creates_reference_rows(self, db_session):
        result = await SeedService(db_session).run_seed()

        assert result.permissions_created == 4
        assert result.roles_created == 3
        assert result.countries_created == len(COUNTRIES)

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op(self, db_session, seeded):
        result = await SeedService(db_session).run_seed()

        assert (result.permissions_created, result.roles_created, result.countries_created) == (0, 0, 0)
        assert await db_session.scalar(select(func.count()).select_from(Permission)) == 4
        assert await db_session.scalar(select(func.count()).select_from(Role)) == 3
        assert await db_session.scalar(select(func.count()).select_from(Country)) == len(COUNTRIES)

    @pytest.mark.asyncio
    async def test_role_grants(self, db_session, seeded):
        grants = {}
        for name in ("user", "admin", "super-admin"):
            rows = await db_session.execute(
                select(Permission.name)
                .select_from(Role)
                .join(Role.permissions)
                .where(Role.name == name)
            )
            grants[name] = set(rows.scalars().all())

        assert grants == {
            "user": {"read"},
            "admin": {"read", "write", "delete"},
            "super-admin": {"read", "write", "delete", "administrator"},
        }
