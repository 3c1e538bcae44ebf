"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test database
    - db_manager patched for code that bypasses get_db (readiness probe)
    - Seed helpers commit: request sessions share the one in-memory connection

Design Decisions:
    - SQLite in-memory + StaticPool: every session sees the same database
    - Users seeded through the real repository (same mapping as production)
    - Tokens obtained through the real sign-in endpoint, never forged
"""

import os

# Never touch a real database from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import cleancrud.infrastructure.database as db_module
import cleancrud.models  # noqa: F401
from cleancrud.config import Settings
from cleancrud.core.domain_types import UserRole, UserStatus
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email, Name
from cleancrud.db.base import Base
from cleancrud.infrastructure.database import get_db, DatabaseSessionManager
from cleancrud.infrastructure.repositories import SqlUserRepository
from cleancrud.infrastructure.security import hash_password
from cleancrud.main import app

PASSWORD = "secret123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite://", token_ttl_minutes=60)


@pytest.fixture
def make_user(test_session_factory):
    """Factory: persist a user (committed) and return the domain object."""

    async def _make(
        email: str = "ada@example.com",
        password: str = PASSWORD,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
        first_name: str = "Ada",
        last_name: str = "Lovelace",
    ) -> User:
        user = User(
            name=Name(first_name, last_name),
            email=Email(email),
            password_hash=hash_password(password),
            role=role,
            status=status,
        )
        async with test_session_factory() as db:
            await SqlUserRepository(db).add(user)
            await db.commit()
        return user

    return _make


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness probe, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def sign_in(client):
    """Sign in through the API; returns Authorization headers."""

    async def _sign_in(email: str, password: str = PASSWORD) -> dict:
        res = await client.post(
            "/api/v1/auth/sign-in", json={"email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}

    return _sign_in


@pytest.fixture
async def user(make_user):
    return await make_user()


@pytest.fixture
async def admin(make_user):
    return await make_user(
        email="root@example.com", role=UserRole.ADMIN,
        first_name="Grace", last_name="Hopper",
    )


@pytest.fixture
async def user_headers(user, sign_in):
    return await sign_in(user.email.value)


@pytest.fixture
async def admin_headers(admin, sign_in):
    return await sign_in(admin.email.value)
