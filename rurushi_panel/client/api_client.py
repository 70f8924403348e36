import asyncio
from typing import Any, Dict, List, Optional, Tuple, Type

import requests
from pydantic import ValidationError

from ..config import config
from ..errors import RequestError
from ..models import (
    ApiEnvelope,
    ConfigResponse,
    Direction,
    FileListResponse,
    PlaylistItem,
    ScanResponse,
    ShowListResponse,
    SubtitleMode,
)


class ApiClient:
    """
    HTTP client for the Rurushi HLS server.

    Every call is a single attempt (no retries) through request(), which
    unwraps the {success, data, error} envelope and raises RequestError for
    anything else. The blocking requests call runs in a worker thread so the
    caller's event loop stays responsive.
    """

    def __init__(self, base_url: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        # Resolved once; later config changes need a new client
        self.base_url = (base_url or config.api_url).rstrip("/")
        # None means a fresh session per call; Session is not thread-safe
        self.session = session
        self.timeout = timeout if timeout is not None else config.settings.request_timeout_sec

    def _send(self, method: str, url: str, json_body: Any,
              headers: Dict[str, str]) -> requests.Response:
        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if json_body is not None:
            kwargs["json"] = json_body
        if self.session is not None:
            return self.session.request(method, url, **kwargs)
        with requests.Session() as session:
            return session.request(method, url, **kwargs)

    async def request(self, endpoint: str, method: str = "GET",
                      json_body: Any = None,
                      headers: Optional[Dict[str, str]] = None,
                      model: Optional[Type] = None) -> Any:
        """
        Issues one call and returns the envelope's data.

        Args:
            endpoint: Path starting with /api
            method: HTTP method
            json_body: Optional JSON-serialisable body
            headers: Extra headers merged over the JSON content type
            model: Optional type the data is validated into

        Raises:
            RequestError: transport failure, non-2xx status, failed or
                malformed envelope
        """
        url = f"{self.base_url}{endpoint}"
        merged = {"Content-Type": "application/json"}
        if headers:
            merged.update(headers)

        try:
            response = await asyncio.to_thread(self._send, method, url, json_body, merged)
        except requests.RequestException as e:
            raise RequestError(str(e) or "API request failed") from e

        if not 200 <= response.status_code < 300:
            raise RequestError(self._http_error_message(response))

        try:
            payload = response.json()
        except ValueError as e:
            raise RequestError(f"Invalid JSON response: {e}") from e

        if not isinstance(payload, dict):
            raise RequestError("API request failed")
        try:
            envelope = ApiEnvelope(**payload)
        except ValidationError as e:
            error = payload.get("error")
            raise RequestError(str(error) if error else "API request failed") from e

        return envelope.unwrap(model)

    @staticmethod
    def _http_error_message(response: requests.Response) -> str:
        try:
            error_data = response.json()
        except ValueError:
            error_data = None
        if isinstance(error_data, dict) and error_data.get("error"):
            return str(error_data["error"])
        return f"API request failed: {response.reason or response.status_code}"

    # --- Config ---

    async def get_config(self) -> ConfigResponse:
        return await self.request("/api/config", model=ConfigResponse)

    async def set_folder(self, path: str) -> None:
        await self.request("/api/folder", method="POST", json_body={"path": path})

    async def scan_videos(self) -> ScanResponse:
        return await self.request("/api/scan", method="POST", model=ScanResponse)

    # --- Files ---

    async def get_files(self) -> FileListResponse:
        return await self.request("/api/files", model=FileListResponse)

    async def get_shows(self) -> ShowListResponse:
        return await self.request("/api/shows", model=ShowListResponse)

    # --- Playback ---

    async def play_video(self, file_path: str) -> None:
        await self.request("/api/play", method="POST", json_body={"file_path": file_path})

    async def stop_playback(self) -> None:
        await self.request("/api/stop", method="POST")

    async def start_streaming(self) -> None:
        await self.request("/api/start-streaming", method="POST")

    async def set_subtitle_mode(self, mode: SubtitleMode) -> None:
        await self.request("/api/subtitle-mode", method="POST",
                           json_body={"mode": SubtitleMode(mode).value})

    # --- Playlist ---

    async def get_playlist(self) -> List[PlaylistItem]:
        return await self.request("/api/playlist", model=List[PlaylistItem])

    async def add_to_playlist(self, show_name: str,
                              episode_range: Optional[Tuple[int, int]] = None,
                              repeat_count: Optional[int] = None) -> None:
        body = {
            "show_name": show_name,
            "episode_range": list(episode_range) if episode_range else None,
            "repeat_count": repeat_count or 0,
        }
        await self.request("/api/playlist/add", method="POST", json_body=body)

    async def remove_from_playlist(self, index: int) -> None:
        await self.request(f"/api/playlist/{index}", method="DELETE")

    async def move_playlist_item(self, index: int, direction: Direction) -> None:
        await self.request("/api/playlist/move", method="POST",
                           json_body={"index": index, "direction": Direction(direction).value})

    async def clear_playlist(self) -> None:
        await self.request("/api/playlist", method="DELETE")


_client_instance = None
def get_api_client() -> ApiClient:
    global _client_instance
    if _client_instance is None:
        _client_instance = ApiClient()
    return _client_instance
