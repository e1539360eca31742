"""media_favorites MCP tool — a user's favorite titles."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field, ValidationError

from media_store.models.media import Favorite, make_key
from media_store.store.library_store import LibraryStore
from media_store.store.user_store import now_ms
from media_store.tools.formatters import format_favorite, format_result_list

logger = logging.getLogger(__name__)

_ACTIONS = {"list", "get", "save", "delete", "clear"}


def register_media_favorites(mcp: FastMCP) -> None:
    """Register the media_favorites tool with the MCP server."""

    @mcp.tool()
    async def media_favorites(
        username: Annotated[str, Field(description="Account the favorites belong to")],
        action: Annotated[
            str,
            Field(description="One of: list, get, save, delete, clear"),
        ] = "list",
        source: Annotated[
            str | None, Field(description="Source site id (get, save, delete)")
        ] = None,
        item_id: Annotated[
            str | None, Field(description="Title id within the source (get, save, delete)")
        ] = None,
        title: Annotated[str | None, Field(description="Title name (save)")] = None,
        source_name: Annotated[
            str | None, Field(description="Human-readable source name (save)")
        ] = None,
        year: Annotated[str, Field(description="Release year (save)")] = "",
        cover: Annotated[str, Field(description="Cover image URL (save)")] = "",
        total_episodes: Annotated[int, Field(description="Episode count (save)", ge=0)] = 0,
        ctx: Context | None = None,
    ) -> str:
        """Manage a user's favorite titles.

        Actions:
        - list: All favorites, newest first
        - get / delete: One favorite (requires source and item_id)
        - save: Add or update a favorite (requires source, item_id, title, source_name)
        - clear: Remove every favorite of the user
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        library: LibraryStore = ctx.lifespan_context["library"]
        return await favorites_action(
            library,
            username,
            action,
            source=source,
            item_id=item_id,
            title=title,
            source_name=source_name,
            year=year,
            cover=cover,
            total_episodes=total_episodes,
        )


async def favorites_action(
    library: LibraryStore,
    username: str,
    action: str,
    *,
    source: str | None = None,
    item_id: str | None = None,
    title: str | None = None,
    source_name: str | None = None,
    year: str = "",
    cover: str = "",
    total_episodes: int = 0,
) -> str:
    """Dispatch one favorites action and render the response text."""
    if action not in _ACTIONS:
        return f"Unknown action '{action}'. Use: {', '.join(sorted(_ACTIONS))}"

    if action == "list":
        favs = await library.list_favorites(username)
        return format_result_list(
            [format_favorite(f) for f in favs], header=f"Favorites of {username}"
        )
    if action == "clear":
        removed = await library.clear_favorites(username)
        return f"Removed {removed} favorite(s)."

    if not source or not item_id:
        return f"Error: action '{action}' requires source and item_id."
    key = make_key(source, item_id)

    if action == "get":
        fav = await library.get_favorite(username, key)
        return format_favorite(fav) if fav else f"[{key}] not found"
    if action == "delete":
        deleted = await library.delete_favorite(username, key)
        return f"Deleted {key}." if deleted else f"[{key}] not found"

    # save
    if not title or not source_name:
        return "Error: save requires title and source_name."
    try:
        fav = Favorite(
            key=key,
            title=title,
            source_name=source_name,
            year=year,
            cover=cover,
            total_episodes=total_episodes,
            search_title=title,
            save_time=now_ms(),
        )
    except ValidationError as exc:
        return f"Error: {exc.errors()[0]['msg']}"
    if not await library.save_favorite(username, fav):
        return f"Error: could not save {key}."
    return f"Saved {format_favorite(fav)}"
