"""media_history MCP tool — watch progress per title."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field, ValidationError

from media_store.models.media import PlayRecord, make_key
from media_store.store.library_store import LibraryStore
from media_store.store.user_store import now_ms
from media_store.tools.formatters import format_play_record, format_result_list

logger = logging.getLogger(__name__)

_ACTIONS = {"list", "get", "save", "delete", "clear"}
_DEFAULT_LIMIT = 20


def register_media_history(mcp: FastMCP) -> None:
    """Register the media_history tool with the MCP server."""

    @mcp.tool()
    async def media_history(
        username: Annotated[str, Field(description="Account the history belongs to")],
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
        episode_index: Annotated[int, Field(description="Current episode, 1-based", ge=1)] = 1,
        total_episodes: Annotated[int, Field(description="Episode count", ge=0)] = 0,
        play_time: Annotated[int, Field(description="Seconds watched", ge=0)] = 0,
        total_time: Annotated[int, Field(description="Episode length in seconds", ge=0)] = 0,
        limit: Annotated[
            int, Field(description="Max records for list", ge=1, le=200)
        ] = _DEFAULT_LIMIT,
        ctx: Context | None = None,
    ) -> str:
        """Track what a user is watching and how far they got.

        Actions:
        - list: Most recently watched first (up to limit)
        - get / delete: One record (requires source and item_id)
        - save: Record progress (requires source, item_id, title, source_name)
        - clear: Remove the user's whole history
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        library: LibraryStore = ctx.lifespan_context["library"]
        return await history_action(
            library,
            username,
            action,
            source=source,
            item_id=item_id,
            title=title,
            source_name=source_name,
            episode_index=episode_index,
            total_episodes=total_episodes,
            play_time=play_time,
            total_time=total_time,
            limit=limit,
        )


async def history_action(
    library: LibraryStore,
    username: str,
    action: str,
    *,
    source: str | None = None,
    item_id: str | None = None,
    title: str | None = None,
    source_name: str | None = None,
    episode_index: int = 1,
    total_episodes: int = 0,
    play_time: int = 0,
    total_time: int = 0,
    limit: int = _DEFAULT_LIMIT,
) -> str:
    """Dispatch one history action and render the response text."""
    if action not in _ACTIONS:
        return f"Unknown action '{action}'. Use: {', '.join(sorted(_ACTIONS))}"

    if action == "list":
        records = await library.list_play_records(username, limit=limit)
        return format_result_list(
            [format_play_record(r) for r in records], header=f"Watch history of {username}"
        )
    if action == "clear":
        removed = await library.clear_play_records(username)
        return f"Removed {removed} play record(s)."

    if not source or not item_id:
        return f"Error: action '{action}' requires source and item_id."
    key = make_key(source, item_id)

    if action == "get":
        record = await library.get_play_record(username, key)
        return format_play_record(record) if record else f"[{key}] not found"
    if action == "delete":
        deleted = await library.delete_play_record(username, key)
        return f"Deleted {key}." if deleted else f"[{key}] not found"

    # save
    if not title or not source_name:
        return "Error: save requires title and source_name."
    try:
        record = PlayRecord(
            key=key,
            title=title,
            source_name=source_name,
            episode_index=episode_index,
            total_episodes=total_episodes,
            play_time=play_time,
            total_time=total_time,
            search_title=title,
            save_time=now_ms(),
        )
    except ValidationError as exc:
        return f"Error: {exc.errors()[0]['msg']}"
    if not await library.save_play_record(username, record):
        return f"Error: could not save {key}."
    return f"Saved {format_play_record(record)}"
