"""Service test fixtures — async DB, FastAPI test client and authenticated users.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use a test session, wrapped by
      DatabaseSessionManager.session() so error mapping matches production
    - db_manager patched so readiness checks hit the test database

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific behaviour is not exercised here)
    - Users are created through UserService so password hashing and email
      normalization are the real ones; tokens come from the app's TokenService
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from task_manager.api.authentication import get_password_hasher, get_token_service
from task_manager.db.base import Base
from task_manager.infrastructure.database import (
    get_db, DatabaseSessionManager, register_sqlite_functions,
)
import task_manager.infrastructure.database as db_module
from task_manager.main import app
import task_manager.models  # noqa: F401
from task_manager.schemas.user import UserCreate
from task_manager.services.seed import seed_defaults
from task_manager.services.user_service import UserService


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    register_sqlite_functions(engine)
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
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def hasher():
    return get_password_hasher()


@pytest.fixture
def token_service():
    return get_token_service()


@pytest.fixture
def create_user(test_db, hasher):
    """Factory: persist a user through UserService and commit."""
    async def _create(
        email="alice@example.com", password="secret",
        first_name="Alice", last_name="Liddell",
    ):
        user = await UserService(test_db, hasher).create_user(UserCreate(
            email=email, password=password,
            first_name=first_name, last_name=last_name,
        ))
        await test_db.commit()
        return user
    return _create


@pytest.fixture
async def user(create_user):
    return await create_user()


@pytest.fixture
def bearer(token_service):
    """Factory: Authorization header for a user."""
    def _bearer(u):
        return {"Authorization": f"Bearer {token_service.issue(u.email)}"}
    return _bearer


@pytest.fixture
def auth_headers(user, bearer):
    return bearer(user)


@pytest.fixture
async def defaults(test_db, hasher):
    """Default statuses (draft, to_review, ...) and labels (feature, bug)."""
    await seed_defaults(test_db, hasher)
    await test_db.commit()
