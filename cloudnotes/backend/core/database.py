"""
Database Handle.

The Database object owns the async SQLAlchemy engine and session factory.
It is built explicitly at process start (application lifespan or CLI),
handed to the FastAPI app through ``app.state.database``, and disposed on
shutdown. Request handlers obtain sessions with the get_db_session
dependency; nothing holds an engine at module level.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cloudnotes.backend.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    Engine plus session factory with an explicit lifecycle.

    Usage:
        database = Database.from_config()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, url: str, **engine_kwargs: Any) -> "Database":
        """Create a handle for an explicit database URL."""
        return cls(create_async_engine(url, **engine_kwargs))

    @classmethod
    def from_config(cls) -> "Database":
        """Create a handle from database.yaml and the DB_PASSWORD secret."""
        from cloudnotes.backend.core.config import get_app_config, get_database_url

        db_config = get_app_config().database
        url = get_database_url()

        engine_kwargs: dict[str, Any] = {"echo": db_config.echo}
        if url.startswith("postgresql"):
            engine_kwargs.update(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            )

        database = cls.from_url(url, **engine_kwargs)
        logger.debug(
            "Database engine created",
            extra={"host": db_config.host, "database": db_config.name},
        )
        return database

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that commits on success and rolls back on error.

        One session per request; it is the unit of work for that request.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        from cloudnotes.backend.models import Base

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created")

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self._engine.dispose()
        logger.debug("Database engine disposed")


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session from the app's handle.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: DbSession):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
