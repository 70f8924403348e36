from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .episode import Episode
from .playlist import PlaylistItem


class SubtitleMode(str, Enum):
    NONE = "None"
    SMART = "Smart"


def _counts_match(video_count: int, show_count: int, shows: Dict[str, List[Episode]]) -> bool:
    total_episodes = sum(len(episodes) for episodes in shows.values())
    return video_count == total_episodes and show_count == len(shows)


class ScanResponse(BaseModel):
    """Result of a library scan. Only used to compose the status line."""
    video_count: int = 0
    show_count: int = 0
    shows: Dict[str, List[Episode]] = Field(default_factory=dict)

    class Config:
        extra = "ignore"

    def counts_consistent(self) -> bool:
        return _counts_match(self.video_count, self.show_count, self.shows)


class ConfigResponse(BaseModel):
    """
    Full snapshot of server state rendered by the panel.
    current_playing is None while the test card is shown.
    """
    videos_folder: Optional[str] = None
    video_count: int = 0
    show_count: int = 0
    shows: Dict[str, List[Episode]] = Field(default_factory=dict)
    playlist: List[PlaylistItem] = Field(default_factory=list)
    subtitle_mode: SubtitleMode = SubtitleMode.NONE
    is_streaming: bool = False
    current_playing: Optional[str] = None

    class Config:
        extra = "ignore"

    def counts_consistent(self) -> bool:
        return _counts_match(self.video_count, self.show_count, self.shows)

    @property
    def is_test_card(self) -> bool:
        return not self.current_playing
