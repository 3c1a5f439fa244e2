"""
Database manager (async SQLAlchemy).

A shared manager owns the engine and sessionmaker, and a dependency yields
sessions.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (  # type: ignore[import-not-found]
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from portal.commons.exceptions import BaseCoreException
from portal.commons.logging import logger
from portal.core.settings import settings


class DatabaseException(BaseCoreException):
    pass


def build_dsn() -> str:
    # psycopg async driver
    return (
        "postgresql+psycopg://"
        f"{settings.PORTAL_DB_USER}:{settings.PORTAL_DB_PASSWORD}"
        f"@{settings.PORTAL_DB_HOST}:{settings.PORTAL_DB_PORT}"
        f"/{settings.PORTAL_DB_NAME}"
    )


class DatabaseManager:
    def __init__(self) -> None:
        self.engine: AsyncEngine | None = None
        self.sessionmaker: async_sessionmaker[AsyncSession] | None = None

    async def initialize(self) -> None:
        if self.engine is not None:
            return
        try:
            self.engine = create_async_engine(build_dsn(), echo=False)
            self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
            logger.info("Database initialized")
        except Exception as exc:
            raise DatabaseException("Failed to initialize database", str(exc)) from exc

    async def shutdown(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.sessionmaker = None
        logger.info("Database shut down")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.sessionmaker is None:
            raise DatabaseException("Database is not initialized")
        async with self.sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()


database_manager = DatabaseManager()
