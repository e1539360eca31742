"""Environment-variable-based configuration."""

import os
from pathlib import Path


def get_storage_type() -> str:
    """Return the storage backend name from MEDIA_STORAGE_TYPE."""
    return os.environ.get("MEDIA_STORAGE_TYPE", "sqlite").strip().lower()


def get_database_url() -> str | None:
    """Return the PostgreSQL URL from POSTGRES_URL, falling back to DATABASE_URL."""
    return os.environ.get("POSTGRES_URL") or os.environ.get("DATABASE_URL") or None


def get_db_path() -> Path:
    """Return the SQLite database file path from MEDIA_DB_PATH."""
    raw = os.environ.get("MEDIA_DB_PATH", "~/.local/share/media_store/media.db")
    return Path(raw).expanduser()


def get_pool_min_size() -> int:
    """Return the minimum PostgreSQL pool size from MEDIA_PG_POOL_MIN."""
    return int(os.environ.get("MEDIA_PG_POOL_MIN", "2"))


def get_pool_max_size() -> int:
    """Return the maximum PostgreSQL pool size from MEDIA_PG_POOL_MAX."""
    return int(os.environ.get("MEDIA_PG_POOL_MAX", "10"))


def get_log_level() -> str:
    """Return the logging level from MEDIA_LOG_LEVEL."""
    return os.environ.get("MEDIA_LOG_LEVEL", "WARNING").upper()
