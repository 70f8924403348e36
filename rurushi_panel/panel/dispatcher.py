import asyncio
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from ..client import ApiClient, get_api_client
from ..config import config
from ..models import ConfigResponse, FileListResponse, ScanResponse, ShowListResponse, SubtitleMode
from ..state import (
    ResourceFetchController,
    StalePolicy,
    config_controller,
    files_controller,
    shows_controller,
)
from .playlist_commands import PlaylistCommandsMixin


class CommandDispatcher(PlaylistCommandsMixin):
    """
    Page-level controller of the panel.

    Turns one user action into:
    1. exactly one mutating call on the server
    2. a status line (success text or "Error: <message>")
    3. a refetch of every resource the mutation may have changed

    Commands never raise. Refetches only run on the success path.
    """

    def __init__(self, client: ApiClient,
                 config_ctl: ResourceFetchController[ConfigResponse],
                 files_ctl: ResourceFetchController[FileListResponse],
                 shows_ctl: ResourceFetchController[ShowListResponse],
                 refetch_delay: Optional[float] = None,
                 on_status: Optional[Callable[[str], None]] = None):
        self.client = client
        self.config_ctl = config_ctl
        self.files_ctl = files_ctl
        self.shows_ctl = shows_ctl
        self.refetch_delay = config.refetch_delay if refetch_delay is None else refetch_delay
        self.on_status = on_status

        self.status_message = "Ready"
        self.is_scanning = False
        self.folder_input = ""

    @classmethod
    def create(cls, client: Optional[ApiClient] = None,
               policy: Optional[StalePolicy] = None, **kwargs) -> "CommandDispatcher":
        """Builds a dispatcher with its three fetch controllers."""
        client = client or get_api_client()
        policy = StalePolicy(policy or config.settings.stale_policy)
        return cls(
            client,
            config_controller(client, policy),
            files_controller(client, policy),
            shows_controller(client, policy),
            **kwargs,
        )

    # --- mount / unmount ---

    async def mount(self) -> None:
        """Starts the initial load of all three resources and waits for it."""
        for ctl in self.controllers:
            ctl.start()
        await asyncio.gather(*(ctl.wait_ready() for ctl in self.controllers))
        self.sync_folder_input()

    def unmount(self) -> None:
        for ctl in self.controllers:
            ctl.close()

    @property
    def controllers(self):
        return (self.config_ctl, self.files_ctl, self.shows_ctl)

    def sync_folder_input(self) -> None:
        """Pre-fills the folder field from the server once, if it is still empty."""
        current = self.config_ctl.value
        if current is not None and current.videos_folder and not self.folder_input:
            self.folder_input = current.videos_folder

    # --- plumbing ---

    def set_status(self, message: str) -> None:
        self.status_message = message
        if self.on_status:
            self.on_status(message)

    async def _refetch(self, controllers: Iterable[ResourceFetchController], delayed: bool) -> None:
        controllers = tuple(controllers)
        if not controllers:
            return
        if delayed and self.refetch_delay > 0:
            # Settle heuristic: the server applies these changes asynchronously
            await asyncio.sleep(self.refetch_delay)
        print(f"🔄 Refetching {', '.join(c.name for c in controllers)}")
        await asyncio.gather(*(c.refetch() for c in controllers))

    async def _command(self, call: Callable[[], Awaitable[Any]], fallback: str,
                       success: Union[str, Callable[[Any], str]],
                       refetch: Iterable[ResourceFetchController] = (),
                       delayed: bool = False,
                       settled: Optional[Callable[[], None]] = None) -> bool:
        try:
            result = await call()
        except Exception as e:
            message = str(e) or fallback
            print(f"❌ {fallback}: {message}")
            self.set_status(f"Error: {message}")
            return False
        finally:
            if settled:
                settled()

        self.set_status(success(result) if callable(success) else success)
        await self._refetch(refetch, delayed)
        return True

    # --- library ---

    async def set_folder(self, path: Optional[str] = None) -> bool:
        if path is not None:
            self.folder_input = path
        if not self.folder_input.strip():
            self.set_status("Please enter a folder path")
            return False

        folder = self.folder_input
        return await self._command(
            lambda: self.client.set_folder(folder),
            fallback="Failed to set folder",
            success="Folder saved successfully",
            refetch=(self.config_ctl,),
            delayed=True,
        )

    async def scan_videos(self) -> bool:
        self.is_scanning = True
        self.set_status("Scanning videos...")
        return await self._command(
            self.client.scan_videos,
            fallback="Failed to scan",
            success=self._scan_summary,
            refetch=self.controllers,
            settled=self._scan_settled,
        )

    def _scan_settled(self) -> None:
        self.is_scanning = False

    @staticmethod
    def _scan_summary(result: ScanResponse) -> str:
        if not result.counts_consistent():
            print(f"⚠️ Scan counts do not match the returned shows "
                  f"({result.video_count} videos / {result.show_count} shows)")
        return f"Found {result.video_count} videos in {result.show_count} shows"

    # --- playback ---

    async def play_file(self, file_path: str) -> bool:
        return await self._command(
            lambda: self.client.play_video(file_path),
            fallback="Failed to play",
            success=f"Playing: {file_path}",
            refetch=(self.config_ctl,),
        )

    async def stop_playback(self) -> bool:
        return await self._command(
            self.client.stop_playback,
            fallback="Failed to stop",
            success="Playback stopped - Test card active",
            refetch=(self.config_ctl,),
        )

    async def start_streaming(self) -> bool:
        return await self._command(
            self.client.start_streaming,
            fallback="Failed to start streaming",
            success="Streaming started",
            refetch=(self.config_ctl,),
            delayed=True,
        )

    async def set_subtitle_mode(self, mode: SubtitleMode) -> bool:
        label = mode.value if isinstance(mode, SubtitleMode) else str(mode)
        return await self._command(
            lambda: self.client.set_subtitle_mode(mode),
            fallback="Failed to set subtitle mode",
            success=f"Subtitle mode set to {label}",
            refetch=(self.config_ctl,),
            delayed=True,
        )
