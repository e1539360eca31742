"""Favorite and play record models.

Both are keyed per user by ``"{source}+{id}"`` and carry a ``save_time`` in
epoch milliseconds.
"""

from pydantic import BaseModel, Field


def make_key(source: str, item_id: str) -> str:
    """Build the storage key for an item from a given source."""
    return f"{source}+{item_id}"


class Favorite(BaseModel):
    """A title the user marked as a favorite."""

    key: str
    title: str
    source_name: str
    cover: str = ""
    year: str = ""
    total_episodes: int = Field(default=0, ge=0)
    search_title: str = ""
    origin: str = "vod"
    save_time: int


class PlayRecord(BaseModel):
    """Watch progress for one title."""

    key: str
    title: str
    source_name: str
    cover: str = ""
    year: str = ""
    episode_index: int = Field(default=1, ge=1)
    total_episodes: int = Field(default=0, ge=0)
    play_time: int = Field(default=0, ge=0)
    total_time: int = Field(default=0, ge=0)
    search_title: str = ""
    save_time: int

    @property
    def progress(self) -> float:
        """Fraction of the current episode watched, 0.0 when length is unknown."""
        if self.total_time <= 0:
            return 0.0
        return min(self.play_time / self.total_time, 1.0)
