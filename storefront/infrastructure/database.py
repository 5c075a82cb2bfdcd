"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory builders. The
application creates one engine at startup and hands the session
factory to the stores that need it.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()


def _enable_sqlite_fk(dbapi_conn, connection_record) -> None:
    """Enable foreign key support in SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create async engine.

    Args:
        database_url: SQLAlchemy URL (asyncpg in production, aiosqlite locally).
        echo: Whether to log SQL statements.

    Returns:
        Configured async engine.
    """
    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_fk)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create database tables if they don't exist."""
    # Register models on the metadata
    import storefront.catalog.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
