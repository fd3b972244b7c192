"""
Meigen Backend — Persistent Store
==================================

What:  Store backends, the lazily created async engine, the session factory,
       the declarative Base and the per-request session dependency.
Why:   One place owns the connection lifecycle; every other module asks for
       a session and never builds engines of its own.
How:   DATABASE_URL selects a StoreBackend once, on first use. The backend
       builds the AsyncEngine; the engine lives for the whole process and is
       disposed from the application lifespan.

Backends:
    EmbeddedSQLiteBackend   sqlite+aiosqlite://     local file, single node
    ManagedPostgresBackend  postgresql+asyncpg://   pooled remote database

    The choice is never revisited at runtime. Tests bypass it entirely by
    overriding get_db_session with sessions bound to their own engine.
"""

import logging
from abc import ABC, abstractmethod
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from meigen.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every ORM model (and by Alembic)."""
    pass


# ══════════════════════════════════════════════════════════════════════════
# Store Backends
# ══════════════════════════════════════════════════════════════════════════

class StoreBackend(ABC):
    """
    Builds the engine for one kind of database.

    Contract:
        - create_engine() is called exactly once per process
        - the returned engine must enforce foreign keys, since subcategory
          and quote rows rely on ON DELETE CASCADE
    """

    name: str = "abstract"

    def __init__(self, url: str):
        self.url = url

    @abstractmethod
    def create_engine(self) -> AsyncEngine:
        ...


def enable_sqlite_pragmas(engine: AsyncEngine, wal: bool = True) -> None:
    """Turn on FK enforcement (and WAL for file databases) for every new connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if wal:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


class EmbeddedSQLiteBackend(StoreBackend):
    """Embedded file database through aiosqlite."""

    name = "sqlite"

    def create_engine(self) -> AsyncEngine:
        engine = create_async_engine(
            self.url,
            echo=settings.log_level == "DEBUG",
        )
        enable_sqlite_pragmas(engine, wal=":memory:" not in self.url)
        return engine


class ManagedPostgresBackend(StoreBackend):
    """Managed PostgreSQL through asyncpg with a sized connection pool."""

    name = "postgresql"

    def create_engine(self) -> AsyncEngine:
        return create_async_engine(
            self.url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=settings.log_level == "DEBUG",
        )


def select_backend(url: str) -> StoreBackend:
    """Map a connection URL to its backend; unknown schemes are a configuration error."""
    if url.startswith("sqlite+aiosqlite://"):
        return EmbeddedSQLiteBackend(url)
    if url.startswith("postgresql+asyncpg://"):
        return ManagedPostgresBackend(url)
    raise ValueError(f"Unsupported DATABASE_URL scheme: {url.split('://', 1)[0]}")


# ══════════════════════════════════════════════════════════════════════════
# Process-wide Engine
# ══════════════════════════════════════════════════════════════════════════

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first call."""
    global _engine, _session_factory
    if _engine is None:
        backend = select_backend(settings.database_url)
        _engine = backend.create_engine()
        # expire_on_commit=False: response models read attributes after commit
        _session_factory = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Store initialized with %s backend", backend.name)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    return _session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    Commits when the handler returns normally, rolls back on any exception
    (then re-raises for the global handlers) and always closes the session.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_all() -> None:
    """Create every table directly from the models (used by the CLI)."""
    import meigen.models  # noqa: F401  registers all tables on Base.metadata

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close every pooled connection; called on application shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Store connections closed")
