from .fetch_controller import (
    FetchState,
    FetchStatus,
    ResourceFetchController,
    StalePolicy,
    config_controller,
    files_controller,
    shows_controller,
)

__all__ = [
    'FetchState',
    'FetchStatus',
    'ResourceFetchController',
    'StalePolicy',
    'config_controller',
    'files_controller',
    'shows_controller',
]
