"""ORM Context — async engine, per-request unit of work, readiness check.

Invariants:
    - One session per request: it is the unit of work the mediator commits
    - A SQLAlchemy error inside a session rolls it back and surfaces as
      DatabaseError (503), most specific failure first
    - Sessions never commit on their own

Design Decisions:
    - Module-level db_manager set by init_db() from the FastAPI lifespan
    - expire_on_commit=False: responses are built after the commit
    - SQLite URLs skip pool sizing (the aiosqlite pool takes no size arguments)
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

from cleancrud.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# (failure type, message, operation); checked in order
_FAILURES = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def as_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a SQLAlchemy failure into the API's DatabaseError."""
    for failure, message, operation in _FAILURES:
        if isinstance(exc, failure):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out one session per unit of work."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        options = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            await session.rollback()
            error = as_database_error(exc)
            logger.error(
                f"Rolled back after database failure: {exc}",
                extra={"error_code": error.code},
            )
            raise error from exc
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as exc:
            logger.error(f"Database readiness check failed: {exc}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: the request's unit of work."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
