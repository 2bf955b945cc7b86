"""
Integration tests for UserService against an in-memory database.
"""

import pytest

from gatehouse.exceptions import NotFoundError
from gatehouse.schemas.common import PaginationParams
from gatehouse.schemas.user import UserUpdate
from gatehouse.services.user_service import UserService


class TestDirectory:
    @pytest.mark.asyncio
    async def test_empty_directory_is_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError, match="Users not found"):
            await UserService(db_session).list_users(PaginationParams())

    @pytest.mark.asyncio
    async def test_three_active_of_five(self, db_session, create_user):
        for index in range(3):
            await create_user(f"active{index}@example.com", f"Active {index}")
        for index in range(2):
            await create_user(f"inactive{index}@example.com", f"Inactive {index}", is_active=False)

        users = await UserService(db_session).list_users(PaginationParams(limit=10, offset=0))

        assert sorted(user.email for user in users) == [
            "active0@example.com",
            "active1@example.com",
            "active2@example.com",
        ]

    @pytest.mark.asyncio
    async def test_find_by_email(self, db_session, create_user):
        await create_user("user@example.com", "Some User")
        service = UserService(db_session)

        found = await service.find_user("user@example.com")

        assert found.full_name == "Some User"
        with pytest.raises(NotFoundError):
            await service.find_user("user@nomatch.com")

    @pytest.mark.asyncio
    async def test_find_by_special_use_domain_email(self, db_session, create_user):
        await create_user("ops@corp.local", "Ops Team")

        found = await UserService(db_session).find_user("ops@corp.local")

        assert found.full_name == "Ops Team"


class TestMutations:
    @pytest.mark.asyncio
    async def test_rename_keeps_email_and_role(self, db_session, reader):
        service = UserService(db_session)

        await service.update_user(reader.id, UserUpdate(full_name="Renamed"))
        fetched = await service.find_user_with_role(str(reader.id))

        assert fetched.full_name == "Renamed"
        assert fetched.email == "reader@example.com"
        assert fetched.role.name == "user"

    @pytest.mark.asyncio
    async def test_deactivate_twice(self, db_session, reader):
        service = UserService(db_session)

        await service.deactivate_user(reader.id)
        await service.deactivate_user(reader.id)

        user = await service.user_repo.get_by_id(reader.id)
        assert user.is_active is False
