"""Tests for the media_favorites and media_history tool logic."""

import pytest

from media_store.tools.media_favorites import favorites_action
from media_store.tools.media_history import history_action


@pytest.mark.asyncio
async def test_favorites_save_list_get_delete(library):
    saved = await favorites_action(
        library,
        "alice",
        "save",
        source="src",
        item_id="1",
        title="Title",
        source_name="Source",
        year="2024",
    )
    assert saved.startswith("Saved [src+1] Title (2024)")

    listed = await favorites_action(library, "alice", "list")
    assert "Favorites of alice" in listed
    assert "1 result(s)" in listed

    got = await favorites_action(library, "alice", "get", source="src", item_id="1")
    assert got.startswith("[src+1] Title")

    assert await favorites_action(library, "alice", "delete", source="src", item_id="1") == (
        "Deleted src+1."
    )
    assert await favorites_action(library, "alice", "get", source="src", item_id="1") == (
        "[src+1] not found"
    )


@pytest.mark.asyncio
async def test_favorites_validation(library):
    assert "Unknown action" in await favorites_action(library, "alice", "frobnicate")
    assert "requires source and item_id" in await favorites_action(library, "alice", "get")
    assert "requires title and source_name" in await favorites_action(
        library, "alice", "save", source="src", item_id="1"
    )


@pytest.mark.asyncio
async def test_favorites_save_for_unknown_user(library):
    result = await favorites_action(
        library, "ghost", "save", source="src", item_id="1", title="T", source_name="S"
    )
    assert result == "Error: could not save src+1."


@pytest.mark.asyncio
async def test_favorites_clear(library):
    for item_id in ("1", "2"):
        await favorites_action(
            library, "alice", "save", source="src", item_id=item_id, title="T", source_name="S"
        )
    assert await favorites_action(library, "alice", "clear") == "Removed 2 favorite(s)."
    assert await favorites_action(library, "alice", "list") == "No results found."


@pytest.mark.asyncio
async def test_history_save_and_list(library):
    saved = await history_action(
        library,
        "alice",
        "save",
        source="src",
        item_id="9",
        title="Show",
        source_name="Source",
        episode_index=2,
        total_episodes=10,
        play_time=300,
        total_time=1200,
    )
    assert saved.startswith("Saved [src+9] Show | ep 2/10 | 25%")

    listed = await history_action(library, "alice", "list", limit=5)
    assert "Watch history of alice" in listed
    assert "[src+9] Show" in listed


@pytest.mark.asyncio
async def test_history_delete_and_clear(library):
    await history_action(
        library, "alice", "save", source="src", item_id="1", title="A", source_name="S"
    )
    await history_action(
        library, "alice", "save", source="src", item_id="2", title="B", source_name="S"
    )
    assert await history_action(library, "alice", "delete", source="src", item_id="1") == (
        "Deleted src+1."
    )
    assert await history_action(library, "alice", "clear") == "Removed 1 play record(s)."


@pytest.mark.asyncio
async def test_history_validation(library):
    assert "Unknown action" in await history_action(library, "alice", "rewind")
    result = await history_action(
        library,
        "alice",
        "save",
        source="src",
        item_id="1",
        title="A",
        source_name="S",
        episode_index=0,
    )
    assert result.startswith("Error:")
