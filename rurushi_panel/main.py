import argparse
import asyncio
import sys
from typing import List, Optional

from rurushi_panel.client import ApiClient
from rurushi_panel.config import config
from rurushi_panel.models import Direction, SubtitleMode
from rurushi_panel.panel import CommandDispatcher, can_move
from rurushi_panel.templates import build_panel_view, render_panel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rurushi-panel",
        description="Control panel for the Rurushi HLS streaming server",
    )
    parser.add_argument("--server", default=None,
                        help=f"Server base URL (default: {config.api_url})")
    parser.add_argument("--quiet", action="store_true", help="Only print the status line.")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Show the current server state.")

    p = sub.add_parser("set-server", help="Save the server base URL to the settings file.")
    p.add_argument("url")

    p = sub.add_parser("folder", help="Set the videos folder.")
    p.add_argument("path")

    sub.add_parser("scan", help="Scan the videos folder.")

    p = sub.add_parser("play", help="Play a file.")
    p.add_argument("file_path")

    sub.add_parser("stop", help="Stop playback and show the test card.")
    sub.add_parser("stream", help="Start HLS streaming.")

    p = sub.add_parser("subtitles", help="Set the subtitle mode.")
    p.add_argument("mode", choices=[m.value for m in SubtitleMode])

    playlist = sub.add_parser("playlist", help="Edit the playlist.")
    psub = playlist.add_subparsers(dest="playlist_command", required=True)
    p = psub.add_parser("add", help="Append a show.")
    p.add_argument("show_name")
    p.add_argument("--range", nargs=2, type=int, metavar=("START", "END"), default=None)
    p.add_argument("--repeat", type=int, default=0)
    p = psub.add_parser("remove", help="Remove the item at INDEX.")
    p.add_argument("index", type=int)
    p = psub.add_parser("move", help="Move the item at INDEX up or down.")
    p.add_argument("index", type=int)
    p.add_argument("direction", choices=[d.value for d in Direction])
    psub.add_parser("clear", help="Remove every item.")

    return parser


async def _dispatch(panel: CommandDispatcher, args: argparse.Namespace) -> bool:
    command = args.command or "status"

    if command == "status":
        return panel.config_ctl.error is None
    if command == "folder":
        return await panel.set_folder(args.path)
    if command == "scan":
        return await panel.scan_videos()
    if command == "play":
        return await panel.play_file(args.file_path)
    if command == "stop":
        return await panel.stop_playback()
    if command == "stream":
        return await panel.start_streaming()
    if command == "subtitles":
        return await panel.set_subtitle_mode(SubtitleMode(args.mode))

    sub = args.playlist_command
    if sub == "add":
        episode_range = tuple(args.range) if args.range else None
        return await panel.add_to_playlist(args.show_name, episode_range, args.repeat)
    if sub == "remove":
        return await panel.remove_from_playlist(args.index)
    if sub == "move":
        direction = Direction(args.direction)
        current = panel.config_ctl.value
        length = len(current.playlist) if current else 0
        # Same rule as the disabled arrow buttons
        if current is not None and not can_move(args.index, direction, length):
            panel.set_status(f"Cannot move item {args.index} {direction.value}")
            return False
        return await panel.move_playlist_item(args.index, direction)
    return await panel.clear_playlist()


async def run_panel(args: argparse.Namespace, client: Optional[ApiClient] = None) -> int:
    client = client or ApiClient(base_url=args.server)
    panel = CommandDispatcher.create(client)
    await panel.mount()
    try:
        ok = await _dispatch(panel, args)
    finally:
        panel.unmount()

    if args.quiet:
        print(f"Status: {panel.status_message}")
    else:
        print(render_panel(build_panel_view(panel)))
    return 0 if ok else 1


def main(args_list: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(args_list)
    if args.command == "set-server":
        if not config.save({"api_url": args.url}):
            return 1
        print(f"✅ Server saved: {config.api_url}")
        return 0
    try:
        return asyncio.run(run_panel(args))
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
