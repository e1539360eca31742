"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from media_store.config import get_log_level, get_storage_type
from media_store.db.connection import create_adapter
from media_store.db.schema import apply_schema
from media_store.store.library_store import LibraryStore
from media_store.store.user_store import UserStore
from media_store.tools.media_favorites import register_media_favorites
from media_store.tools.media_history import register_media_history
from media_store.tools.media_users import register_media_users


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage the database adapter lifecycle."""
    # Configure logging to stderr (stdout is MCP stdio transport)
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    logger.info("Opening %s storage", get_storage_type())
    db = await create_adapter()
    try:
        await apply_schema(db)
        yield {
            "db": db,
            "users": UserStore(db),
            "library": LibraryStore(db),
        }
    finally:
        await db.close()
        logger.info("Database connection closed")


_INSTRUCTIONS = """\
Per-user media library: accounts, favorites and watch history, stored in \
SQLite or PostgreSQL depending on MEDIA_STORAGE_TYPE.

- media_users: create, list, get, delete, set_role, ban or unban accounts. \
Create the account before saving favorites or history for it.
- media_favorites: list, get, save, delete or clear a user's favorite titles.
- media_history: list, get, save, delete or clear watch progress.

Titles are identified by source + item_id. Saving an existing title replaces it.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "media-store",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_media_favorites(mcp)
    register_media_history(mcp)
    register_media_users(mcp)

    return mcp
