"""Shared fixtures: an in-process fake of the Rurushi HLS server API."""

import json
import re
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from rurushi_panel.client import ApiClient


def _episode(ep_id, show, number):
    name = f"{show} - {number:02d}" if number is not None else f"{show} - Special"
    return {
        "id": ep_id,
        "name": name,
        "file_path": f"/videos/{show}/{name}.mkv",
        "show_name": show,
        "episode_number": number,
    }


LIBRARY = {
    "Alpha": [_episode(1, "Alpha", 1), _episode(2, "Alpha", 2), _episode(3, "Alpha", None)],
    "Beta": [_episode(4, "Beta", 1)],
}


class FakeRurushi:
    """In-memory server state plus a log of the calls it received."""

    def __init__(self):
        self.videos_folder = None
        self.shows = {}
        self.playlist = []
        self.subtitle_mode = "None"
        self.is_streaming = False
        self.current_playing = None
        self.calls = []
        self.raw_responses = []  # queued (status, body bytes, content type)
        self.path_failures = {}  # path -> (status, body bytes, content type)
        self.url = ""

    def queue_raw(self, status, body, content_type="application/json"):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.raw_responses.append((status, body, content_type))

    def fail_path(self, path, status, body, content_type="application/json"):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.path_failures[path] = (status, body.encode("utf-8"), content_type)

    def config_payload(self):
        return {
            "videos_folder": self.videos_folder,
            "video_count": sum(len(v) for v in self.shows.values()),
            "show_count": len(self.shows),
            "shows": self.shows,
            "playlist": self.playlist,
            "subtitle_mode": self.subtitle_mode,
            "is_streaming": self.is_streaming,
            "current_playing": self.current_playing,
        }

    def handle(self, method, path, body):
        """Returns (status, envelope dict)."""
        ok = lambda data: (200, {"success": True, "data": data, "error": None})
        fail = lambda msg, status=200: (status, {"success": False, "data": None, "error": msg})

        if method == "GET" and path == "/api/config":
            return ok(self.config_payload())
        if method == "POST" and path == "/api/folder":
            if not body or not body.get("path"):
                return fail("Missing path", 400)
            self.videos_folder = body["path"]
            return ok("Folder set")
        if method == "POST" and path == "/api/scan":
            if not self.videos_folder:
                return fail("Videos folder not set")
            self.shows = json.loads(json.dumps(LIBRARY))
            return ok({
                "video_count": sum(len(v) for v in self.shows.values()),
                "show_count": len(self.shows),
                "shows": self.shows,
            })
        if method == "GET" and path == "/api/files":
            files = [
                {"display_name": ep["name"], "file_path": ep["file_path"], "show_name": show}
                for show, eps in self.shows.items() for ep in eps
            ]
            return ok({"files": files})
        if method == "GET" and path == "/api/shows":
            return ok({"shows": sorted(self.shows)})
        if method == "POST" and path == "/api/play":
            self.current_playing = body["file_path"]
            return ok("Playing")
        if method == "POST" and path == "/api/stop":
            self.current_playing = None
            return ok("Stopped")
        if method == "POST" and path == "/api/start-streaming":
            self.is_streaming = True
            return ok("Streaming")
        if method == "POST" and path == "/api/subtitle-mode":
            if body.get("mode") not in ("None", "Smart"):
                return fail("Invalid subtitle mode", 400)
            self.subtitle_mode = body["mode"]
            return ok("Subtitle mode set")
        if method == "GET" and path == "/api/playlist":
            return ok(self.playlist)
        if method == "POST" and path == "/api/playlist/add":
            if body["show_name"] not in self.shows:
                return fail(f"Show not found: {body['show_name']}")
            self.playlist.append({
                "show_name": body["show_name"],
                "episode_range": body.get("episode_range"),
                "repeat_count": body.get("repeat_count", 0),
            })
            return ok("Added")
        if method == "POST" and path == "/api/playlist/move":
            index, direction = body["index"], body["direction"]
            target = index - 1 if direction == "up" else index + 1
            if not (0 <= index < len(self.playlist)) or not (0 <= target < len(self.playlist)):
                return fail("Cannot move item out of bounds")
            self.playlist[index], self.playlist[target] = self.playlist[target], self.playlist[index]
            return ok("Moved")
        if method == "DELETE" and path == "/api/playlist":
            self.playlist = []
            return ok("Cleared")
        match = re.fullmatch(r"/api/playlist/(\d+)", path)
        if method == "DELETE" and match:
            index = int(match.group(1))
            if index >= len(self.playlist):
                return fail("Index out of range")
            self.playlist.pop(index)
            return ok("Removed")
        return fail("Not found", 404)


def _make_handler(fake):
    class _Handler(BaseHTTPRequestHandler):
        def _serve(self, method):
            length = int(self.headers.get("Content-Length", 0))
            raw = self.rfile.read(length) if length else b""
            body = json.loads(raw) if raw else None
            fake.calls.append((method, self.path, body))

            if self.path in fake.path_failures:
                status, payload, content_type = fake.path_failures[self.path]
            elif fake.raw_responses:
                status, payload, content_type = fake.raw_responses.pop(0)
            else:
                status, envelope = fake.handle(method, self.path, body)
                payload, content_type = json.dumps(envelope).encode("utf-8"), "application/json"

            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def do_GET(self):
            self._serve("GET")

        def do_POST(self):
            self._serve("POST")

        def do_DELETE(self):
            self._serve("DELETE")

        def log_message(self, format, *args):
            return

    return _Handler


@pytest.fixture
def fake_server():
    """Run the fake server on a random port for the duration of a test."""
    fake = FakeRurushi()
    httpd = HTTPServer(("127.0.0.1", 0), _make_handler(fake))
    fake.url = f"http://127.0.0.1:{httpd.server_address[1]}"
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield fake
    finally:
        httpd.shutdown()
        httpd.server_close()


@pytest.fixture
def client(fake_server):
    return ApiClient(base_url=fake_server.url, timeout=5)
