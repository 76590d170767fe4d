"""
Database Session Management

The Database object owns the engine and the session factory. One instance is
created at application startup, kept on app.state, and handed to request
handlers through the get_session dependency. Tests build their own instance
against a throwaway SQLite file.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from shortener.db import models  # noqa: F401  registers tables on SQLModel.metadata
from shortener.db.interface import DatabaseAdapter
from shortener.db.sqlite_adapter import get_database_adapter

logger = logging.getLogger(__name__)


class Database:
    """Engine, session factory and adapter for one database URL."""

    def __init__(self, database_url: str, adapter: Optional[DatabaseAdapter] = None):
        self.url = database_url
        self.adapter = adapter or get_database_adapter()
        self.engine = self.adapter.create_engine(database_url)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
            autocommit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database schema ready (%s)", self.adapter.get_dialect_name())

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get a database session.

    - Creates a session from the app's Database
    - Commits on success, rolls back on exception
    - Closes the session when the request is done
    """
    database: Database = request.app.state.database
    async with database.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
