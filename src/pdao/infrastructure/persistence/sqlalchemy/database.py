"""Database engine and session lifecycle.

A single ``Database`` instance is created when the application starts and
disposed when it stops; request handlers get sessions from it through
dependency injection.
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from pdao.infrastructure.persistence.sqlalchemy.models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine (connection pool) and the session factory."""

    def __init__(self, url: str, echo: bool = False):
        self._url = url
        options: dict[str, Any] = {"echo": echo}
        if ":memory:" in url:
            # All sessions must share the one in-memory connection
            options["poolclass"] = StaticPool
        elif not url.startswith("sqlite"):
            options["pool_pre_ping"] = True
        self._engine: AsyncEngine = create_async_engine(url, **options)
        self._session_maker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        return self._session_maker

    async def create_tables(self) -> None:
        """
        Create all database tables (idempotent).

        Uses SQLAlchemy's create_all() which only creates missing tables.
        Existing tables and their data are never modified or deleted.
        """
        logger.info("Ensuring all database tables exist...")
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed: %s", e)
            return False
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()
        logger.info("Database connections closed")
