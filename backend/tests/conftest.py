"""Pytest configuration for tests directory."""
import os

# Must be set before petmagic.settings is imported anywhere.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from petmagic.infra.db.base import Base
from petmagic.infra.db.models import MessageModel, NotificationModel, PetModel, UserModel  # noqa: F401
from petmagic.infra.db.session import get_db
from petmagic.main import app


@pytest.fixture
async def engine():
    """In-memory SQLite engine with the full schema."""
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
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app with get_db bound to the test engine."""

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
async def users(db_session):
    """Two demo users: John (owner of Buddy) and Jane (prospective adopter)."""
    john = UserModel(name="John Doe", email="john@example.com", password="password123")
    jane = UserModel(name="Jane Smith", email="jane@example.com", password="password123")
    db_session.add_all([john, jane])
    await db_session.commit()
    return john.to_entity(), jane.to_entity()


@pytest.fixture
async def buddy(db_session, users):
    """Buddy the Golden Retriever, owned by John."""
    john, _ = users
    pet = PetModel(
        name="Buddy",
        age=3,
        breed="Golden Retriever",
        type="dog",
        description="Friendly and energetic.",
        location="New York, NY",
        image="https://example.com/buddy.jpg",
        owner_id=john.id,
    )
    db_session.add(pet)
    await db_session.commit()
    return pet.to_entity()

