# -*- coding: utf-8 -*-
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import config
from ..models import ConfigResponse, Direction, PlaylistItem, SubtitleMode
from ..panel import CommandDispatcher, can_move


@dataclass
class PlaylistRow:
    index: int
    key: str
    label: str
    can_move_up: bool
    can_move_down: bool


@dataclass
class PanelView:
    """Everything the panel shows, derived from the controllers' snapshots."""
    page_state: str  # "loading" | "error" | "empty" | "ready"
    error: Optional[str] = None
    status_message: str = "Ready"
    folder_input: str = ""
    is_scanning: bool = False
    video_count: int = 0
    show_count: int = 0
    subtitle_mode: SubtitleMode = SubtitleMode.NONE
    is_streaming: bool = False
    current_playing: Optional[str] = None
    test_card: bool = True
    files: List[str] = field(default_factory=list)
    shows: List[str] = field(default_factory=list)
    playlist: List[PlaylistRow] = field(default_factory=list)


def build_playlist_rows(playlist: List[PlaylistItem]) -> List[PlaylistRow]:
    length = len(playlist)
    return [
        PlaylistRow(
            index=idx,
            key=item.key,
            label=item.label,
            can_move_up=can_move(idx, Direction.UP, length),
            can_move_down=can_move(idx, Direction.DOWN, length),
        )
        for idx, item in enumerate(playlist)
    ]


def build_panel_view(dispatcher: CommandDispatcher, max_files: Optional[int] = None) -> PanelView:
    max_files = config.settings.max_visible_files if max_files is None else max_files
    cfg_state = dispatcher.config_ctl.snapshot()

    if cfg_state.loading:
        return PanelView(page_state="loading", status_message=dispatcher.status_message)
    if cfg_state.error:
        return PanelView(page_state="error", error=cfg_state.error,
                         status_message=dispatcher.status_message)
    current: Optional[ConfigResponse] = cfg_state.value
    if current is None:
        return PanelView(page_state="empty", status_message=dispatcher.status_message)

    files = dispatcher.files_ctl.value
    shows = dispatcher.shows_ctl.value

    return PanelView(
        page_state="ready",
        status_message=dispatcher.status_message,
        folder_input=dispatcher.folder_input,
        is_scanning=dispatcher.is_scanning,
        video_count=current.video_count,
        show_count=current.show_count,
        subtitle_mode=current.subtitle_mode,
        is_streaming=current.is_streaming,
        current_playing=current.current_playing,
        test_card=current.is_test_card,
        files=[f.display_name for f in files.files[:max_files]] if files else [],
        shows=list(shows.shows) if shows else [],
        playlist=build_playlist_rows(current.playlist),
    )


def _radio(view: PanelView, mode: SubtitleMode) -> str:
    marker = "●" if view.subtitle_mode == mode else "○"
    return f"{marker} {mode.value}"


def render_panel(view: PanelView) -> str:
    """Renders the panel as plain text for the terminal."""
    if view.page_state == "loading":
        return "Loading..."
    if view.page_state == "error":
        return f"Error: {view.error}"
    if view.page_state == "empty":
        return ""

    lines = ["Rurushi HLS Server", "Video streaming control panel", ""]

    lines.append("== Videos Folder ==")
    lines.append(f"Folder: {view.folder_input or '-'}")
    if view.is_scanning:
        lines.append("Scanning...")
    lines.append(f"Videos found: {view.video_count}")
    lines.append(f"Shows organized: {view.show_count}")
    lines.append("")

    lines.append("== Subtitle Mode ==")
    lines.append("  ".join(_radio(view, m) for m in SubtitleMode))
    lines.append("")

    lines.append("== Streaming Control ==")
    lines.append("Streaming Active ✓" if view.is_streaming else "Start Streaming")
    lines.append("")

    lines.append("== Playback Controller ==")
    if view.test_card:
        lines.append("Not playing - Test card active")
    else:
        lines.append(f"Now Playing: {view.current_playing}")
    if view.files:
        lines.extend(f"  > {name}" for name in view.files)
    else:
        lines.append("  No files available - scan videos first")
    lines.append("")

    lines.append("== Playlist Editor ==")
    if view.shows:
        lines.extend(f"  + {show}" for show in view.shows)
    else:
        lines.append("  No shows available - scan videos first")
    lines.append(f"Current Playlist ({len(view.playlist)} items):")
    if view.playlist:
        for row in view.playlist:
            up = "↑" if row.can_move_up else " "
            down = "↓" if row.can_move_down else " "
            lines.append(f"  [{row.index}] {row.label}  {up}{down}")
    else:
        lines.append("  Playlist is empty")
    lines.append("")

    lines.append(f"Status: {view.status_message}")
    return "\n".join(lines)
