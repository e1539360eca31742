"""Process-wide asyncpg connection pool.

The pool is created on first use from the configured connection URL and
reused for the life of the process. ``reset_pool()`` forgets it so tests can
start from a clean slate.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from media_store.config import get_database_url, get_pool_max_size, get_pool_min_size
from media_store.db.errors import ConfigurationError

if TYPE_CHECKING:
    import asyncpg

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None
_lock: asyncio.Lock | None = None


async def _create_pool(url: str, *, min_size: int, max_size: int) -> asyncpg.Pool:
    """Open a new asyncpg pool."""
    import asyncpg as _asyncpg

    return await _asyncpg.create_pool(url, min_size=min_size, max_size=max_size)


def _require_database_url() -> str:
    url = get_database_url()
    if not url:
        raise ConfigurationError(
            "Postgres connection string missing. Set POSTGRES_URL (preferred) or DATABASE_URL."
        )
    return url


async def get_pool() -> asyncpg.Pool:
    """Return the process-wide pool, creating it on the first call."""
    global _pool, _lock

    if _pool is not None:
        return _pool

    if _lock is None:
        _lock = asyncio.Lock()
    async with _lock:
        # Another caller may have created it while we waited
        if _pool is None:
            url = _require_database_url()
            min_size, max_size = get_pool_min_size(), get_pool_max_size()
            _pool = await _create_pool(url, min_size=min_size, max_size=max_size)
            logger.info("Postgres pool created (min=%d, max=%d)", min_size, max_size)
    return _pool


async def close_pool() -> None:
    """Close the pool if one exists and forget it."""
    global _pool
    pool, _pool = _pool, None
    if pool is not None:
        await pool.close()
        logger.info("Postgres pool closed")


def reset_pool() -> None:
    """Forget the pool without closing it. For test isolation."""
    global _pool, _lock
    _pool = None
    _lock = None
