from .episode import Episode, FileInfo, FileListResponse, ShowListResponse
from .playlist import PlaylistItem, Direction
from .server_state import ConfigResponse, ScanResponse, SubtitleMode
from .envelope import ApiEnvelope, DEFAULT_ERROR

__all__ = [
    'Episode',
    'FileInfo',
    'FileListResponse',
    'ShowListResponse',
    'PlaylistItem',
    'Direction',
    'ConfigResponse',
    'ScanResponse',
    'SubtitleMode',
    'ApiEnvelope',
    'DEFAULT_ERROR',
]
