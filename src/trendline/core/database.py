"""Database engine and session management."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import settings

logger = logging.getLogger(__name__)

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Create async session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def get_db(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Provide a session from the default (or given) factory.

    Trend queries are read-only, so the session is rolled back on exit
    rather than committed.
    """
    async with (factory or async_session_factory)() as session:
        try:
            yield session
        finally:
            await session.rollback()


def dialect_name(session: AsyncSession) -> str:
    """Return the SQLAlchemy dialect name of the engine bound to a session."""
    name = session.get_bind().dialect.name
    logger.debug(f"Session bound to dialect {name}")
    return name
