# AlbumSync Output Module
# Rich console output

from albumsync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
