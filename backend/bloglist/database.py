"""
Bloglist Backend — Database Handle & Session Management
========================================================

What:  The `Database` handle (engine + session factory), the declarative
       `Base`, and the per-request session dependency.
How:   `Database` is constructed explicitly by the app lifespan, opened once at
       startup, stored on `app.state.database`, and disposed at shutdown.
       Route handlers receive a session through `get_db_session`, which
       commits on success and rolls back on error.
Who:   main.py (lifecycle), route handlers (sessions), tests (in-memory DB).

Connection Pooling:
    PostgreSQL URLs get a sized queue pool (pool_size / max_overflow /
    pre_ping / hourly recycle). SQLite URLs skip pool sizing because their
    dialects reject those arguments; in-memory SQLite is pinned to one shared
    connection with StaticPool, otherwise every session would see an empty
    database.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate and
    tests use for `create_all`.
    """
    pass


def _engine_options(
    url: str,
    pool_size: int,
    max_overflow: int,
    pool_pre_ping: bool,
    echo: bool,
) -> Dict[str, Any]:
    parsed = make_url(url)
    options: Dict[str, Any] = {"echo": echo}

    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options.update(
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=pool_pre_ping,
        pool_recycle=3600,
    )
    return options


class Database:
    """
    Process-wide database handle with an explicit open/close lifecycle.

    Lifecycle:
        Database(url) → connect() → session() ... → disconnect()

    Calling `session()` before `connect()` or after `disconnect()` raises
    RuntimeError instead of silently creating a new engine.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self._options = _engine_options(url, pool_size, max_overflow, pool_pre_ping, echo)
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """Create the engine and session factory. Idempotent."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, **self._options)
        # expire_on_commit=False: response models read attributes after commit
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created (%s)", make_url(self.url).get_backend_name())

    async def disconnect(self) -> None:
        """Dispose the engine, closing every pooled connection. Idempotent."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._session_factory()

    async def create_all(self) -> None:
        """Create every mapped table. Used by tests and local SQLite runs."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Runs SELECT 1; used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the handle opened by the lifespan."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("No database attached to the application state.")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the application's Database handle
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns the connection to the pool)
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
