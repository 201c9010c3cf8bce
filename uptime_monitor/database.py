"""Database setup and session management.

Monitors live in a local SQLite file (``DATA_PATH/monitors.db``) unless
DATABASE_URL points somewhere else.
"""
import logging
import os

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import settings, get_database_url

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite for concurrent probe write-backs."""
    cursor = dbapi_connection.cursor()
    # WAL mode allows concurrent reads during writes
    cursor.execute("PRAGMA journal_mode=WAL")
    # Wait up to 30 seconds for locks before failing
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine, applying SQLite pragmas when needed."""
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            connect_args={"timeout": 30},
        )
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)
        return engine

    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Session factory that keeps loaded rows usable after commit."""
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


_database_url = get_database_url()
engine = build_engine(_database_url)
async_session = build_session_factory(engine)


async def init_db(bind: AsyncEngine = engine):
    """Create tables, making sure the SQLite data directory exists."""
    if bind is engine and _database_url.startswith("sqlite"):
        os.makedirs(settings.data_path, exist_ok=True)

    # Import models so they register on Base.metadata
    from . import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready at %s", bind.url.render_as_string(hide_password=True))


async def close_db(bind: AsyncEngine = engine):
    """Close database connections."""
    await bind.dispose()
