"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - Backend exceptions leave this module only as ConflictError / UnavailableError /
      InternalError (core/errors.py); driver text is logged, never returned
    - asyncio.CancelledError is never caught; a cancelled request aborts its query

Design Decisions:
    - Manager lives on app.state (created in lifespan), not in a module global
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing mirrors max-open / max-idle semantics: idle connections are the
      persistent pool, the rest are overflow
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from social.config import Settings
from social.core.errors import (
    ConflictError, ErrorContext, InternalError, SocialError, UnavailableError,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def pool_options(settings: Settings) -> dict[str, Any]:
    """Translate max-open / max-idle / idle-time settings into SQLAlchemy pool kwargs."""
    max_open = settings.db_max_open_conns
    max_idle = settings.db_max_idle_conns
    if max_open <= 0:
        # unlimited open connections
        pool_size = max(1, max_idle)
        max_overflow = -1
    else:
        pool_size = max(1, min(max_idle, max_open))
        max_overflow = max(0, max_open - pool_size)
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_recycle": int(settings.db_max_idle_time.total_seconds()) or -1,
        "pool_timeout": max(settings.db_query_timeout.total_seconds(), 1.0),
    }


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


def _conflicting_field(exc: IntegrityError) -> str | None:
    detail = str(exc.orig).lower()
    for field in ("username", "email"):
        if field in detail:
            return field
    return None


def map_database_error(exc: BaseException, operation: str) -> SocialError:
    """Classify a backend failure into the domain taxonomy.

    Logs the backend detail here so callers can re-raise without leaking it.
    """
    if isinstance(exc, IntegrityError) and _is_unique_violation(exc):
        field = _conflicting_field(exc)
        logger.info(
            f"DB unique violation during {operation} (field={field})",
            extra={"operation": operation, "error_code": "CONFLICT"},
        )
        return ConflictError(field, ErrorContext(operation=operation))

    unavailable = (
        isinstance(exc, (OperationalError, PoolTimeoutError, OSError, asyncio.TimeoutError))
        or (isinstance(exc, DBAPIError) and exc.connection_invalidated)
    )
    if unavailable:
        logger.error(
            f"DB unavailable during {operation}: {exc}",
            extra={"operation": operation, "error_code": "SERVICE_UNAVAILABLE"},
        )
        return UnavailableError(operation)

    logger.error(
        f"DB internal error during {operation}: {exc}",
        extra={"operation": operation, "error_code": "INTERNAL_ERROR"},
        exc_info=exc,
    )
    return InternalError(operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(self, database_url: str, **engine_kwargs: Any):
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **engine_kwargs,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseSessionManager":
        return cls(settings.db_addr, **pool_options(settings))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            await session.rollback()
            raise map_database_error(e, "session") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except SocialError as e:
            logger.warning(f"DB health check failed: {e.code}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    db_manager = getattr(request.app.state, "db", None)
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_db_manager(request).session() as session:
        yield session
