"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wildlanka.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    SQL echo follows ``DEBUG``; connections are checked before reuse so a
    database restart does not fail the next login.
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Objects stay readable after commit; nothing is flushed implicitly.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
