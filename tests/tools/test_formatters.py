"""Tests for tool output formatters."""

from media_store.models.media import Favorite, PlayRecord
from media_store.models.user import User, UserRole
from media_store.tools.formatters import (
    format_favorite,
    format_play_record,
    format_result_list,
    format_save_time,
    format_user,
)


def test_format_save_time():
    assert format_save_time(1700000000000) == "2023-11-14 22:13"


def test_format_favorite():
    fav = Favorite(
        key="src+1",
        title="Title",
        source_name="Source",
        year="2024",
        total_episodes=12,
        save_time=1700000000000,
    )
    text = format_favorite(fav)
    assert text.splitlines()[0] == "[src+1] Title (2024) | Source | 12 ep"
    assert "saved 2023-11-14 22:13" in text


def test_format_favorite_minimal():
    fav = Favorite(key="src+1", title="Title", source_name="Source", save_time=0)
    assert format_favorite(fav).splitlines()[0] == "[src+1] Title | Source"


def test_format_play_record():
    record = PlayRecord(
        key="src+1",
        title="Show",
        source_name="Source",
        episode_index=3,
        total_episodes=12,
        play_time=600,
        total_time=1200,
        save_time=1700000000000,
    )
    assert format_play_record(record).splitlines()[0] == "[src+1] Show | ep 3/12 | 50%"


def test_format_result_list_empty():
    assert format_result_list([]) == "No results found."


def test_format_result_list():
    text = format_result_list(["a", "b"], header="Items")
    assert text == "Items\n2 result(s)\n\na\n\nb"


def test_format_user():
    user = User(username="bob", password_hash="h", created_at=1700000000000)
    assert format_user(user) == "bob | user\n  created 2023-11-14 22:13"
    banned = User(
        username="eve", password_hash="h", role=UserRole.ADMIN, banned=True, created_at=0
    )
    assert format_user(banned).splitlines()[0] == "eve | admin | banned"
