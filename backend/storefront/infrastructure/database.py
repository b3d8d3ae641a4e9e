"""Database Session Manager — async connection pool, scoped transactions, health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - transaction() commits only when its block exits cleanly; the session is
      closed on every exit path
    - A failed rollback is logged and never masks the original error
    - All SQLAlchemy exceptions mapped to PersistenceError (core/errors.py)
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Non-SQLAlchemy exceptions (ExportError, validation) still roll back but are
      re-raised unchanged so callers see their own error type
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from storefront.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def _map_error(e: SQLAlchemyError) -> PersistenceError:
    """Translate a SQLAlchemy failure into the domain error, logging the cause."""
    if isinstance(e, IntegrityError):
        logger.error(f"DB integrity error: {e}")
        return PersistenceError("Integrity constraint violated", "commit")
    if isinstance(e, OperationalError):
        logger.error(f"DB operational error: {e}")
        return PersistenceError("Connection or operational error", "execute")
    if isinstance(e, DBAPIError):
        logger.error(f"DB driver error: {e}")
        return PersistenceError("Database driver error", "query")
    logger.error(f"SQLAlchemy error: {e}")
    return PersistenceError("Database operation failed", "unknown")


async def _safe_rollback(session: AsyncSession) -> None:
    try:
        await session.rollback()
    except Exception as rollback_error:
        logger.error(
            f"Rollback failed: {rollback_error}", exc_info=True,
        )


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True, "pool_recycle": 3600}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception. Caller commits."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await _safe_rollback(session)
            raise _map_error(e) from e
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Unit of work: commit on clean exit, rollback on any exception, always close."""
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await _safe_rollback(session)
            raise _map_error(e) from e
        except BaseException:
            await _safe_rollback(session)
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for services that open their own transactions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for read-only database sessions."""
    async with get_db_manager().session() as session:
        yield session
