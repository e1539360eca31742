"""Favorites and watch history for a user."""

import logging

from media_store.db.adapter import DatabaseAdapter
from media_store.db.queries import (
    delete_owned,
    get_favorite,
    get_play_record,
    list_favorites,
    list_play_records,
    upsert_favorite_stmt,
    upsert_play_record_stmt,
)
from media_store.models.media import Favorite, PlayRecord

logger = logging.getLogger(__name__)


class LibraryStore:
    """Per-user favorites and play records."""

    def __init__(self, db: DatabaseAdapter):
        """Initialize with a database adapter."""
        self.db = db

    # -- Favorites --

    async def save_favorite(self, username: str, fav: Favorite) -> bool:
        """Insert or replace a favorite. Returns False on a database error."""
        result = await upsert_favorite_stmt(self.db, username, fav).run()
        if not result.success:
            logger.warning("Failed to save favorite %s for %s: %s", fav.key, username, result.error)
        return result.success

    async def get_favorite(self, username: str, key: str) -> Favorite | None:
        """Fetch one favorite."""
        return await get_favorite(self.db, username, key)

    async def list_favorites(self, username: str) -> list[Favorite]:
        """All favorites, newest first."""
        return await list_favorites(self.db, username)

    async def delete_favorite(self, username: str, key: str) -> bool:
        """Remove one favorite."""
        return await delete_owned(self.db, "favorites", username, key) > 0

    async def clear_favorites(self, username: str) -> int:
        """Remove every favorite. Returns the number removed."""
        return await delete_owned(self.db, "favorites", username, None)

    # -- Play records --

    async def save_play_record(self, username: str, record: PlayRecord) -> bool:
        """Insert or replace a play record. Returns False on a database error."""
        result = await upsert_play_record_stmt(self.db, username, record).run()
        if not result.success:
            logger.warning(
                "Failed to save play record %s for %s: %s", record.key, username, result.error
            )
        return result.success

    async def get_play_record(self, username: str, key: str) -> PlayRecord | None:
        """Fetch one play record."""
        return await get_play_record(self.db, username, key)

    async def list_play_records(self, username: str, limit: int | None = None) -> list[PlayRecord]:
        """Play records, most recently watched first."""
        return await list_play_records(self.db, username, limit)

    async def delete_play_record(self, username: str, key: str) -> bool:
        """Remove one play record."""
        return await delete_owned(self.db, "play_records", username, key) > 0

    async def clear_play_records(self, username: str) -> int:
        """Remove all watch history. Returns the number removed."""
        return await delete_owned(self.db, "play_records", username, None)

    async def import_play_records(self, username: str, records: list[PlayRecord]) -> int:
        """Upsert many play records atomically: all are saved or none are.

        Raises the underlying database error if any record fails.
        """
        if not records:
            return 0
        stmts = [upsert_play_record_stmt(self.db, username, r) for r in records]
        results = await self.db.batch(stmts)
        logger.info("Imported %d play record(s) for %s", len(results), username)
        return len(results)
