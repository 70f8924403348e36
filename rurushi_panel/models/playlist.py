from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field


class Direction(str, Enum):
    UP = "up"      # toward index 0
    DOWN = "down"  # toward the tail


class PlaylistItem(BaseModel):
    """
    One entry of the server-owned playlist.
    Position inside the playlist is the serving order.
    """
    show_name: str = Field(..., description="Key into the show catalog")
    # Inclusive (start, end); None means every episode of the show
    episode_range: Optional[Tuple[int, int]] = None
    # 0 = server default repeat policy
    repeat_count: int = Field(0, ge=0)

    class Config:
        extra = "ignore"

    @property
    def label(self) -> str:
        if self.episode_range:
            start, end = self.episode_range
            return f"{self.show_name} - Episodes {start}-{end}"
        return self.show_name

    @property
    def key(self) -> str:
        if self.episode_range:
            return f"{self.show_name}-{self.episode_range[0]}-{self.episode_range[1]}"
        return f"{self.show_name}-all"
