"""Adapter creation — dispatches to SQLite or PostgreSQL by configuration."""

import logging
from pathlib import Path

import aiosqlite

from media_store.config import get_db_path, get_storage_type
from media_store.db.adapter import DatabaseAdapter
from media_store.db.errors import ConfigurationError
from media_store.db.postgres_adapter import PostgresAdapter
from media_store.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

STORAGE_TYPES = ("sqlite", "postgres")


async def create_adapter(db_path: Path | str | None = None) -> DatabaseAdapter:
    """Create a database adapter for the configured storage type.

    Dispatches on MEDIA_STORAGE_TYPE. For in-memory SQLite databases,
    pass ":memory:". The Postgres adapter does not connect until first use.
    """
    # Explicit ":memory:" always uses SQLite (used by tests)
    if db_path == ":memory:":
        return await _create_sqlite(":memory:")

    storage_type = get_storage_type()
    if storage_type == "postgres":
        logger.info("Using Postgres storage")
        return PostgresAdapter()
    if storage_type == "sqlite":
        return await _create_sqlite(db_path or get_db_path())
    raise ConfigurationError(
        f"Unknown MEDIA_STORAGE_TYPE {storage_type!r}; expected one of {', '.join(STORAGE_TYPES)}"
    )


async def _create_sqlite(db_path: Path | str) -> SQLiteAdapter:
    """Open a SQLite connection in autocommit mode."""
    db_path = str(db_path)

    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path, isolation_level=None)
    conn.row_factory = aiosqlite.Row

    # Enable WAL mode for better concurrent read performance
    await conn.execute("PRAGMA journal_mode=WAL")
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.info("Using SQLite storage at %s", db_path)
    return SQLiteAdapter(conn)
