"""SQLAlchemy engine and sessions for the Postgres entity store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from huddle.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine from ``DATABASE__*`` settings.

    SQL is echoed when ``DEBUG`` is on.
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
    """Session factory for the entity store.

    The store opens one short transaction per operation, so loaded rows
    are never expired or autoflushed behind its back.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
