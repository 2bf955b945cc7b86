"""
Pytest configuration and fixtures for Gatehouse tests.

This module provides:
- In-memory SQLite database per test (aiosqlite + StaticPool)
- Seeded permissions, roles and countries
- User factory and bearer token helpers
- Async HTTP client with the database dependency overridden
"""

# Set environment variables BEFORE importing anything from gatehouse
import os

os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-characters!"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_MEMORY_COST"] = "8192"
os.environ["ARGON2_PARALLELISM"] = "1"

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from gatehouse.core.database import get_db
from gatehouse.core.security import create_access_token, hash_password
from gatehouse.main import app
from gatehouse.models import Base, User
from gatehouse.repositories.reference_repository import CountryRepository, RoleRepository
from gatehouse.schemas.seed import SeedResponse
from gatehouse.services.seed_service import SeedService

TEST_PASSWORD = "TestPass123"


# ============================================================================
# Database Fixtures
# ============================================================================
@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> SeedResponse:
    """Permissions, roles ("user", "admin", "super-admin") and countries."""
    async with session_factory() as session:
        return await SeedService(session).run_seed()


# ============================================================================
# User Fixtures
# ============================================================================
@pytest.fixture
def create_user(
    session_factory: async_sessionmaker[AsyncSession],
    seeded: SeedResponse,
) -> Callable[..., Awaitable[User]]:
    """
    Factory for users committed to the test database.

    Usage:
        user = await create_user("jane@example.com", "Jane", role="admin", country="Spain")
    """

    async def _create(
        email: str,
        full_name: str,
        role: str = "user",
        is_active: bool = True,
        country: str | None = None,
    ) -> User:
        async with session_factory() as session:
            role_row = await RoleRepository(session).get_by_name(role)
            country_row = (
                await CountryRepository(session).get_by_name(country) if country else None
            )
            user = User(
                email=email,
                full_name=full_name,
                password_hash=hash_password(TEST_PASSWORD),
                is_active=is_active,
                role_id=role_row.id,
                country_id=country_row.id if country_row else None,
            )
            session.add(user)
            await session.commit()
            return user

    return _create


@pytest_asyncio.fixture
async def reader(create_user) -> User:
    """Active user with the "user" role (read only)."""
    return await create_user("reader@example.com", "Reader One", role="user", country="Spain")


@pytest_asyncio.fixture
async def admin(create_user) -> User:
    """Active user with the "admin" role (read, write, delete)."""
    return await create_user("admin@example.com", "Admin One", role="admin")


@pytest_asyncio.fixture
async def super_admin(create_user) -> User:
    """Active user with the "super-admin" role (every permission)."""
    return await create_user("root@example.com", "Root One", role="super-admin")


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build a bearer Authorization header for a user."""

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ============================================================================
# FastAPI Client Fixtures
# ============================================================================
@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Async client for the app, with get_db bound to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.state.sessionmaker = session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.sessionmaker = None
