"""Pytest configuration and fixtures."""

from datetime import datetime
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from spotmap.config import Settings
from spotmap.models import Base, Spot, Tag, User
from spotmap.models.base import utcnow
from spotmap.services.container import SpotServices, build_spot_services

# In-memory SQLite shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

HOME_LOCATION = {"latitude": 40.7128, "longitude": -74.0060}


class FrozenClock:
    """Clock that only moves when a test says so."""

    def __init__(self, now: datetime | None = None):
        self.now = now or utcnow()

    def __call__(self) -> datetime:
        return self.now


async def count_rows(db: AsyncSession, model) -> int:
    """Number of rows currently stored for ``model``."""
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def make_user(db: AsyncSession, username: str, reputation: int = 0) -> User:
    """Create and commit a user."""
    user = User(username=username, reputation=reputation)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def settings() -> Settings:
    """Settings with the production spot rules and no .env lookup."""
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        default_floor="1",
        spot_deletion_window_hours=24,
        report_threshold_base=10,
    )


@pytest.fixture
def clock() -> FrozenClock:
    """Controllable clock for the deletion window."""
    return FrozenClock()


@pytest.fixture
def services(db: AsyncSession, settings: Settings, clock: FrozenClock) -> SpotServices:
    """Spot service graph bound to the test session."""
    return build_spot_services(db, settings=settings, clock=clock)


@pytest_asyncio.fixture
async def creator(db: AsyncSession) -> User:
    """User who creates spots."""
    return await make_user(db, "alice", reputation=3)


@pytest_asyncio.fixture
async def reviewer(db: AsyncSession) -> User:
    """User who reviews other people's spots."""
    return await make_user(db, "bob", reputation=1)


@pytest_asyncio.fixture
async def second_reviewer(db: AsyncSession) -> User:
    """Another reviewer."""
    return await make_user(db, "carol", reputation=2)


@pytest_asyncio.fixture
async def seeded_tag(db: AsyncSession) -> Tag:
    """Tag that ships with the app."""
    tag = Tag(label="Study", seeded=True)
    db.add(tag)
    await db.commit()
    return tag


@pytest_asyncio.fixture
async def spot(services: SpotServices, creator: User, seeded_tag: Tag) -> Spot:
    """Spot created through the lifecycle, with one seed review rated 4."""
    return await services.lifecycle.create_spot(
        title="Quiet Corner",
        creator_id=creator.id,
        location=HOME_LOCATION,
        floor="2",
        tag_label=seeded_tag.label,
        description="Plenty of outlets",
        rating=4,
    )
