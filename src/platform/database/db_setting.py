"""
SQLAlchemy async engine and session management

Database owns one AsyncEngine and hands out sessions through an async context
manager. Driver-level connectivity failures are translated here, once, into
PersistenceError so callers never see driver exceptions.

SQLite (aiosqlite) is supported for local runs and tests:
- pool sizing options are skipped (SQLite uses its own pool defaults)
- a generous busy timeout lets concurrent writers queue on the database lock
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import PersistenceError
from src.platform.logging.loguru_io import Logger


SQLITE_BUSY_TIMEOUT_SECONDS = 30


class Base(DeclarativeBase):
    pass


def _engine_kwargs(db_url: str) -> dict[str, Any]:
    if db_url.startswith('sqlite'):
        return {'connect_args': {'timeout': SQLITE_BUSY_TIMEOUT_SECONDS}}
    return {
        'pool_size': settings.DB_POOL_SIZE,
        'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
        'pool_timeout': settings.DB_POOL_TIMEOUT,
        'pool_recycle': settings.DB_POOL_RECYCLE,
        'pool_pre_ping': settings.DB_POOL_PRE_PING,
    }


class Database:
    """Database handle for the dependency-injection container."""

    def __init__(self, db_url: str | None = None) -> None:
        self._db_url = db_url or settings.DATABASE_URL_ASYNC
        self._engine: AsyncEngine = create_async_engine(
            self._db_url, echo=False, **_engine_kwargs(self._db_url)
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Rolls back on any exception; OperationalError/InterfaceError surface as
        PersistenceError.
        """
        try:
            async with self._session_factory() as session:
                try:
                    yield session
                except Exception:
                    await session.rollback()
                    raise
        except (OperationalError, InterfaceError) as e:
            Logger.base.error(f'🗄️ [DB] Storage unavailable: {e}')
            raise PersistenceError(f'Storage unavailable: {type(e.orig).__name__}') from e
        except OSError as e:
            # Connection refused/reset before the driver could wrap it
            Logger.base.error(f'🗄️ [DB] Storage unreachable: {e}')
            raise PersistenceError(f'Storage unreachable: {type(e).__name__}') from e

    async def create_tables(self) -> None:
        """Create tables if missing (tests and local runs; production uses alembic)"""
        # Models register themselves on Base.metadata when imported
        import src.service.admission.driven_adapter.model  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    async def drop_tables(self) -> None:
        import src.service.admission.driven_adapter.model  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self._engine.dispose()
