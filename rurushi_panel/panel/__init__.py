from .dispatcher import CommandDispatcher
from .playlist_commands import PlaylistCommandsMixin, can_move

__all__ = ['CommandDispatcher', 'PlaylistCommandsMixin', 'can_move']
