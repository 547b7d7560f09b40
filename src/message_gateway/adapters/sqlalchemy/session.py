"""SQLAlchemy adapter – SqlAlchemySessionFactory."""
from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from message_gateway.adapters.sqlalchemy.models import Base
from message_gateway.kernel.errors import StorageError
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)

# asyncpg raises plain OSError subclasses (ConnectionRefusedError, TimeoutError)
# when the server cannot be reached; SQLAlchemy does not wrap those.
DRIVER_ERRORS: tuple[type[BaseException], ...] = (SQLAlchemyError, OSError)


class SqlAlchemySessionFactory:
    """Creates async SQLAlchemy sessions from an engine URL.

    The engine and its pool are shared by every caller; each call returns a
    fresh session that the caller must close.
    """

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    def __call__(self) -> AsyncSession:
        return self._session_factory()

    @contextlib.asynccontextmanager
    async def transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Session inside ``BEGIN``; any driver failure leaves as :class:`StorageError`."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except DRIVER_ERRORS as exc:
            logger.error("store.operation_failed", operation=operation, error=repr(exc))
            raise StorageError(operation, cause=exc) from exc

    async def create_schema(self) -> None:
        """Create every table that does not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["DRIVER_ERRORS", "SqlAlchemySessionFactory"]
