"""Compact output formatters for MCP tool responses."""

from datetime import UTC, datetime

from media_store.models.media import Favorite, PlayRecord
from media_store.models.user import User


def format_save_time(save_time: int) -> str:
    """Epoch milliseconds → ``YYYY-MM-DD HH:MM`` in UTC."""
    return datetime.fromtimestamp(save_time / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def format_favorite(fav: Favorite) -> str:
    """Format: [source+id] Title (2024) | source_name | 12 ep."""
    header = f"[{fav.key}] {fav.title}"
    if fav.year:
        header += f" ({fav.year})"
    parts = [header, fav.source_name]
    if fav.total_episodes:
        parts.append(f"{fav.total_episodes} ep")
    lines = [" | ".join(parts), f"  saved {format_save_time(fav.save_time)}"]
    return "\n".join(lines)


def format_play_record(record: PlayRecord) -> str:
    """Format: [source+id] Title | ep 3/12 | 45% + saved time."""
    episodes = f"ep {record.episode_index}"
    if record.total_episodes:
        episodes += f"/{record.total_episodes}"
    header = f"[{record.key}] {record.title} | {episodes} | {record.progress:.0%}"
    return f"{header}\n  {record.source_name}, saved {format_save_time(record.save_time)}"


def format_user(user: User) -> str:
    """Format: alice | admin [| banned] + created time."""
    parts = [user.username, user.role.value]
    if user.banned:
        parts.append("banned")
    return f"{' | '.join(parts)}\n  created {format_save_time(user.created_at)}"


def format_result_list(formatted_items: list[str], header: str | None = None) -> str:
    """Count + items joined by blank lines."""
    if not formatted_items:
        return "No results found."

    lines: list[str] = []
    if header:
        lines.append(header)
    lines.append(f"{len(formatted_items)} result(s)")
    lines.append("")
    lines.append("\n\n".join(formatted_items))
    return "\n".join(lines)
