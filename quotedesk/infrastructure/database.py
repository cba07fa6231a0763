"""Record Database — async engine, units of work and fault classification.

Invariants:
    - session() is a read-only unit of work; transaction() commits on clean exit
    - Any SQLAlchemy failure inside either rolls back and surfaces as a
      PersistenceError carrying `retryable`
    - retryable is True only for connection-level faults (OperationalError,
      invalidated connections); constraint and programming errors are final
    - ping() never raises; readiness reports False instead

Design Decisions:
    - Classification lives here, next to the driver exceptions, so the record
      store decides on retries from a flag instead of inspecting SQLAlchemy types
    - db_manager module attribute set by init_db() in the lifespan; the
      readiness check reads it at call time
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

from quotedesk.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def classify_failure(exc: SQLAlchemyError, operation: str) -> PersistenceError:
    """Map a SQLAlchemy exception onto the PersistenceError the store sees."""
    if isinstance(exc, IntegrityError):
        return PersistenceError("Record conflicts with stored data", operation)
    if isinstance(exc, OperationalError):
        return PersistenceError(
            "Store temporarily unavailable", operation, retryable=True,
        )
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return PersistenceError("Connection lost", operation, retryable=True)
    return PersistenceError("Store rejected the operation", operation)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    options = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return options


class DatabaseSessionManager:
    """Owns the engine behind the record store and the sequence counter."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def _unit_of_work(
        self, operation: str, commit: bool,
    ) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
            if commit:
                await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            fault = classify_failure(e, operation)
            logger.error(
                "Store %s failed: %s", operation, e,
                extra={"error_code": fault.code, "retryable": fault.retryable},
            )
            raise fault from e
        finally:
            await session.close()

    def session(self, operation: str = "read"):
        """Unit of work for reads; nothing is committed."""
        return self._unit_of_work(operation, commit=False)

    def transaction(self, operation: str = "write"):
        """Unit of work that commits when the block exits without error."""
        return self._unit_of_work(operation, commit=True)

    async def ping(self) -> bool:
        try:
            async with self.session("ping") as db:
                await db.execute(text("SELECT 1"))
            return True
        except PersistenceError:
            return False

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager
