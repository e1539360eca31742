"""Query helpers for users, favorites and play records.

Every helper takes a DatabaseAdapter and uses ``?`` placeholders, so the same
code runs on SQLite and Postgres.
"""

from typing import Any

from media_store.db.adapter import DatabaseAdapter
from media_store.db.statement import PreparedStatement
from media_store.models.media import Favorite, PlayRecord
from media_store.models.user import User, UserRole

_FAVORITE_COLUMNS = (
    "key, title, source_name, cover, year, total_episodes, search_title, origin, save_time"
)
_PLAY_RECORD_COLUMNS = (
    "key, title, source_name, cover, year, episode_index, total_episodes,"
    " play_time, total_time, search_title, save_time"
)


def row_to_user(row: dict[str, Any]) -> User:
    """Convert a database row to a User."""
    return User(
        username=row["username"],
        password_hash=row["password_hash"],
        role=UserRole(row["role"]),
        banned=bool(row["banned"]),
        created_at=row["created_at"],
    )


def row_to_favorite(row: dict[str, Any]) -> Favorite:
    """Convert a database row to a Favorite."""
    return Favorite.model_validate({k: v for k, v in row.items() if k != "username"})


def row_to_play_record(row: dict[str, Any]) -> PlayRecord:
    """Convert a database row to a PlayRecord."""
    return PlayRecord.model_validate({k: v for k, v in row.items() if k != "username"})


# -- Users --


def insert_user_stmt(
    db: DatabaseAdapter,
    username: str,
    password_hash: str,
    created_at: int,
    role: UserRole = UserRole.USER,
) -> PreparedStatement:
    """Build an idempotent user insert; a duplicate username changes nothing."""
    return db.prepare(
        """INSERT INTO users (username, password_hash, role, banned, created_at)
        VALUES (?, ?, ?, 0, ?)
        ON CONFLICT (username) DO NOTHING"""
    ).bind(username, password_hash, role.value, created_at)


async def get_user(db: DatabaseAdapter, username: str) -> User | None:
    """Fetch a user by username."""
    row = await db.prepare(
        "SELECT username, password_hash, role, banned, created_at FROM users WHERE username = ?"
    ).bind(username).first()
    if row is None:
        return None
    return row_to_user(row)


async def list_users(db: DatabaseAdapter) -> list[User]:
    """List all users, oldest account first."""
    result = await db.prepare(
        "SELECT username, password_hash, role, banned, created_at FROM users"
        " ORDER BY created_at, username"
    ).all()
    return [row_to_user(r) for r in result.rows]


async def update_user_field(db: DatabaseAdapter, username: str, column: str, value: Any) -> bool:
    """Set one column of a user row. Returns True if the user existed."""
    if column not in ("role", "banned", "password_hash"):
        raise ValueError(f"Column {column!r} cannot be updated")
    result = await db.prepare(f"UPDATE users SET {column} = ? WHERE username = ?").bind(
        value, username
    ).run()
    return result.success and bool(result.changes)


def delete_user_stmts(db: DatabaseAdapter, username: str) -> list[PreparedStatement]:
    """Statements removing a user and everything they own, children first."""
    return [
        db.prepare("DELETE FROM play_records WHERE username = ?").bind(username),
        db.prepare("DELETE FROM favorites WHERE username = ?").bind(username),
        db.prepare("DELETE FROM users WHERE username = ?").bind(username),
    ]


# -- Favorites --


def upsert_favorite_stmt(
    db: DatabaseAdapter, username: str, fav: Favorite
) -> PreparedStatement:
    """Build an insert-or-replace for a favorite keyed by (username, key)."""
    return db.prepare(
        f"""INSERT INTO favorites (username, {_FAVORITE_COLUMNS})
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT (username, key) DO UPDATE SET
            title = excluded.title,
            source_name = excluded.source_name,
            cover = excluded.cover,
            year = excluded.year,
            total_episodes = excluded.total_episodes,
            search_title = excluded.search_title,
            origin = excluded.origin,
            save_time = excluded.save_time"""
    ).bind(
        username,
        fav.key,
        fav.title,
        fav.source_name,
        fav.cover,
        fav.year,
        fav.total_episodes,
        fav.search_title,
        fav.origin,
        fav.save_time,
    )


async def get_favorite(db: DatabaseAdapter, username: str, key: str) -> Favorite | None:
    """Fetch one favorite."""
    row = await db.prepare(
        f"SELECT {_FAVORITE_COLUMNS} FROM favorites WHERE username = ? AND key = ?"
    ).bind(username, key).first()
    if row is None:
        return None
    return row_to_favorite(row)


async def list_favorites(db: DatabaseAdapter, username: str) -> list[Favorite]:
    """List a user's favorites, most recently saved first."""
    result = await db.prepare(
        f"SELECT {_FAVORITE_COLUMNS} FROM favorites WHERE username = ?"
        " ORDER BY save_time DESC, key"
    ).bind(username).all()
    return [row_to_favorite(r) for r in result.rows]


# -- Play records --


def upsert_play_record_stmt(
    db: DatabaseAdapter, username: str, record: PlayRecord
) -> PreparedStatement:
    """Build an insert-or-replace for a play record keyed by (username, key)."""
    return db.prepare(
        f"""INSERT INTO play_records (username, {_PLAY_RECORD_COLUMNS})
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT (username, key) DO UPDATE SET
            title = excluded.title,
            source_name = excluded.source_name,
            cover = excluded.cover,
            year = excluded.year,
            episode_index = excluded.episode_index,
            total_episodes = excluded.total_episodes,
            play_time = excluded.play_time,
            total_time = excluded.total_time,
            search_title = excluded.search_title,
            save_time = excluded.save_time"""
    ).bind(
        username,
        record.key,
        record.title,
        record.source_name,
        record.cover,
        record.year,
        record.episode_index,
        record.total_episodes,
        record.play_time,
        record.total_time,
        record.search_title,
        record.save_time,
    )


async def get_play_record(db: DatabaseAdapter, username: str, key: str) -> PlayRecord | None:
    """Fetch one play record."""
    row = await db.prepare(
        f"SELECT {_PLAY_RECORD_COLUMNS} FROM play_records WHERE username = ? AND key = ?"
    ).bind(username, key).first()
    if row is None:
        return None
    return row_to_play_record(row)


async def list_play_records(
    db: DatabaseAdapter, username: str, limit: int | None = None
) -> list[PlayRecord]:
    """List a user's play records, most recently watched first."""
    sql = (
        f"SELECT {_PLAY_RECORD_COLUMNS} FROM play_records WHERE username = ?"
        " ORDER BY save_time DESC, key"
    )
    params: list[Any] = [username]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)
    result = await db.prepare(sql).bind(*params).all()
    return [row_to_play_record(r) for r in result.rows]


async def delete_owned(db: DatabaseAdapter, table: str, username: str, key: str | None) -> int:
    """Delete one keyed row, or all of a user's rows when ``key`` is None."""
    if table not in ("favorites", "play_records"):
        raise ValueError(f"Unknown table {table!r}")
    if key is None:
        stmt = db.prepare(f"DELETE FROM {table} WHERE username = ?").bind(username)
    else:
        stmt = db.prepare(f"DELETE FROM {table} WHERE username = ? AND key = ?").bind(
            username, key
        )
    result = await stmt.run()
    if not result.success:
        return 0
    return result.changes or 0
