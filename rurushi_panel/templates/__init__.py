from .panel_view import PanelView, PlaylistRow, build_panel_view, build_playlist_rows, render_panel

__all__ = ['PanelView', 'PlaylistRow', 'build_panel_view', 'build_playlist_rows', 'render_panel']
