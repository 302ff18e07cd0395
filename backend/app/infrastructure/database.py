"""Database Session Manager — async PostgreSQL pool, per-request sessions, health checks.

Invariants:
    - One AsyncSession per request, rolled back on error and closed on every exit path
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions escaping a session are mapped to DatabaseError (core/errors.py)
    - asyncpg connections carry a command_timeout so no statement runs unbounded

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Most specific SQLAlchemy class wins when choosing the DatabaseError message
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Checked in order; IntegrityError and OperationalError are DBAPIError subclasses
_ERROR_MESSAGES: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "Integrity constraint violated"),
    (OperationalError, "Connection or operational error"),
    (DBAPIError, "Database driver error"),
    (SQLAlchemyError, "Database operation failed"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    message = next(msg for cls, msg in _ERROR_MESSAGES if isinstance(exc, cls))
    return DatabaseError(message, exc)


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 25,
        max_overflow: int = 5,
        pool_recycle: int = 300,
        statement_timeout: float | None = None,
    ):
        connect_args = {}
        if statement_timeout and database_url.startswith("postgresql+asyncpg"):
            connect_args["command_timeout"] = statement_timeout
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=pool_recycle,
            connect_args=connect_args,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back and raise DatabaseError on SQLAlchemy failures."""
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                error = to_database_error(e)
                logger.error(
                    f"{error.message}: {e}",
                    extra={"error_code": error.code.value},
                )
                raise error from e

    async def health_check(self) -> bool:
        """SELECT 1 through the pool (startup and /health)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
