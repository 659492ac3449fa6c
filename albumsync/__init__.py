"""AlbumSync - two-way synchronization of photo albums.

Keeps the subdirectories of a local photo root in step with the albums of a
remote photo store: newer local files are uploaded, newer remote items
downloaded, and deleted photos moved to a recycle bin.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "AlbumSync",
    "AlbumSyncConfig",
    "FolderRemoteStore",
    "SyncEngine",
    "SyncOutcome",
    "SyncResult",
    "load_config",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("AlbumSync", "SyncEngine", "SyncOutcome", "SyncResult"):
        from albumsync import sync

        return getattr(sync, name)
    if name in ("AlbumSyncConfig", "load_config"):
        from albumsync import config

        return getattr(config, name)
    if name == "FolderRemoteStore":
        from albumsync.remote import FolderRemoteStore

        return FolderRemoteStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
