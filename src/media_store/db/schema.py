"""Table definitions for user accounts, favorites and watch history.

Every statement is portable between SQLite and PostgreSQL and is run as an
individual prepared statement, since the Postgres adapter has no ``exec()``.
"""

import logging

from media_store.db.adapter import DatabaseAdapter

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        username TEXT PRIMARY KEY,
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'user',
        banned INTEGER NOT NULL DEFAULT 0,
        created_at BIGINT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS favorites (
        username TEXT NOT NULL REFERENCES users(username) ON DELETE CASCADE,
        key TEXT NOT NULL,
        title TEXT NOT NULL,
        source_name TEXT NOT NULL,
        cover TEXT NOT NULL DEFAULT '',
        year TEXT NOT NULL DEFAULT '',
        total_episodes INTEGER NOT NULL DEFAULT 0,
        search_title TEXT NOT NULL DEFAULT '',
        origin TEXT NOT NULL DEFAULT 'vod',
        save_time BIGINT NOT NULL,
        PRIMARY KEY (username, key)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS play_records (
        username TEXT NOT NULL REFERENCES users(username) ON DELETE CASCADE,
        key TEXT NOT NULL,
        title TEXT NOT NULL,
        source_name TEXT NOT NULL,
        cover TEXT NOT NULL DEFAULT '',
        year TEXT NOT NULL DEFAULT '',
        episode_index INTEGER NOT NULL DEFAULT 1,
        total_episodes INTEGER NOT NULL DEFAULT 0,
        play_time INTEGER NOT NULL DEFAULT 0,
        total_time INTEGER NOT NULL DEFAULT 0,
        search_title TEXT NOT NULL DEFAULT '',
        save_time BIGINT NOT NULL,
        PRIMARY KEY (username, key)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_favorites_user_time ON favorites(username, save_time)",
    "CREATE INDEX IF NOT EXISTS idx_play_records_user_time ON play_records(username, save_time)",
)


async def apply_schema(db: DatabaseAdapter) -> None:
    """Create all tables and indexes if they do not exist yet."""
    for sql in SCHEMA_STATEMENTS:
        result = await db.prepare(sql).run()
        if not result.success:
            raise RuntimeError(f"Schema statement failed: {result.error}")
    logger.debug("Schema applied (%d statements)", len(SCHEMA_STATEMENTS))
