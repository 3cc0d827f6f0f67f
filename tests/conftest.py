"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.permissions.roles import Permission, Role, get_role_catalog
from app.main import create_app
from app.modules import load_models
from app.modules.exercises.models import Exercise
from app.modules.users.models import User
from app.modules.users.repos import UserRepository
from app.modules.users.services import CredentialStore
from tests.factories.auth import TEST_PASSWORD
from tests.factories.exercise import ExerciseCreateFactory


# Register every model on Base.metadata
load_models()

# One in-memory database shared by all connections of a test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

UserMaker = Callable[..., Awaitable[User]]


@pytest.fixture
async def engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Enforce foreign keys the way Postgres does
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session whose transaction is rolled back afterwards."""
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# User Fixtures
# ============================================================


@pytest.fixture
def credential_store(db: AsyncSession) -> CredentialStore:
    """Credential store on the test session."""
    return CredentialStore(UserRepository(db), get_role_catalog())


@pytest.fixture
def make_user(credential_store: CredentialStore) -> UserMaker:
    """Factory fixture registering users through the credential store.

    Returns:
        Coroutine function taking a username, an optional role and an
        optional permission override
    """

    async def _make_user(
        username: str,
        role: Role | None = None,
        permissions: list[Permission] | None = None,
    ) -> User:
        return await credential_store.create(
            username=username,
            secret=TEST_PASSWORD,
            role=role,
            permissions=permissions,
        )

    return _make_user


@pytest.fixture
async def visitor(make_user: UserMaker) -> User:
    return await make_user("vera", Role.VISITOR)


@pytest.fixture
async def writer(make_user: UserMaker) -> User:
    return await make_user("walt", Role.WRITER)


@pytest.fixture
async def other_writer(make_user: UserMaker) -> User:
    return await make_user("wendy", Role.WRITER)


@pytest.fixture
async def admin(make_user: UserMaker) -> User:
    return await make_user("ada", Role.ADMIN)


# ============================================================
# Exercise Fixtures
# ============================================================


@pytest.fixture
def make_exercise(db: AsyncSession) -> Callable[..., Awaitable[Exercise]]:
    """Factory fixture inserting exercises directly, bypassing the API.

    Pass ``owner=None`` to create an ownerless catalog exercise.
    """

    async def _make_exercise(owner: User | None, **overrides) -> Exercise:
        data = ExerciseCreateFactory.build(**overrides)
        exercise = Exercise(
            **data.model_dump(),
            owner_id=owner.id if owner else None,
            is_custom=owner is not None,
        )
        db.add(exercise)
        await db.flush()
        await db.refresh(exercise)
        return exercise

    return _make_exercise
