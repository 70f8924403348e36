from typing import Optional, Tuple

from ..models import Direction


def can_move(index: int, direction: Direction, length: int) -> bool:
    """
    Whether the move button for the row at index is enabled.
    Up is disabled on the first row, down on the last one.
    """
    if index < 0 or index >= length:
        return False
    if Direction(direction) == Direction.UP:
        return index > 0
    return index < length - 1


class PlaylistCommandsMixin:
    """
    Index-addressed playlist edits. Each one fires the remote mutation and
    then re-reads the configuration; the displayed order is never patched
    locally. Bounds are left to the server.

    Expects the host to provide self.client, self.config_ctl and _command().
    """

    async def add_to_playlist(self, show_name: str,
                              episode_range: Optional[Tuple[int, int]] = None,
                              repeat_count: int = 0) -> bool:
        return await self._command(
            lambda: self.client.add_to_playlist(show_name, episode_range, repeat_count),
            fallback="Failed to add to playlist",
            success=f"Added {show_name} to playlist",
            refetch=(self.config_ctl,),
        )

    async def remove_from_playlist(self, index: int) -> bool:
        return await self._command(
            lambda: self.client.remove_from_playlist(index),
            fallback="Failed to remove from playlist",
            success="Removed from playlist",
            refetch=(self.config_ctl,),
        )

    async def move_playlist_item(self, index: int, direction: Direction) -> bool:
        return await self._command(
            lambda: self.client.move_playlist_item(index, direction),
            fallback="Failed to move item",
            success="Playlist order updated",
            refetch=(self.config_ctl,),
        )

    async def clear_playlist(self) -> bool:
        return await self._command(
            self.client.clear_playlist,
            fallback="Failed to clear playlist",
            success="Playlist cleared",
            refetch=(self.config_ctl,),
        )
