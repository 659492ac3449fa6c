# AlbumSync Exceptions


class AlbumSyncError(Exception):
    """Base class for album synchronization errors."""


class AlbumMetadataError(AlbumSyncError):
    """An album or remote item is missing a field the sync pass depends on.

    Raised as a hard failure: the current album pass is aborted.
    """


class RemoteStoreError(AlbumSyncError):
    """A remote store operation (list, upload, download) failed."""
