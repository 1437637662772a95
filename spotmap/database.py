"""Async database engine and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from spotmap.config import get_settings

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the duration of a request."""
    async with async_session_maker() as session:
        yield session


async def commit_or_rollback(db: AsyncSession) -> None:
    """Commit the session, rolling back before re-raising if the commit fails.

    Every write in spotmap is its own unit of work; a failed commit must not
    leave the session in a state that blocks the compensating writes that
    follow it.
    """
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
