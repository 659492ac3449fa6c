# AlbumSync Remote Stores
# Implementations of the RemoteStore protocol

from albumsync.remote.folder import FolderRemoteStore

__all__ = ["FolderRemoteStore"]
