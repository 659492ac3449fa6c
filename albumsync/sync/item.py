# AlbumSync Sync Items
# Album, remote item, local file and the candidate variants paired by name

import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from albumsync.utils.hashing import file_fingerprint
from albumsync.utils.paths import as_utc, mtime_of

# Well-known names of albums filled by a phone's automatic backup
AUTO_BACKUP_PATTERN = re.compile(r"^(instant ?upload|auto ?backup)", re.IGNORECASE)


def join_key(name: str) -> str:
    """Case-insensitive key used to pair remote items with local files."""
    return name.lower()


def is_auto_backup_name(name: str) -> bool:
    """Check if an album name is one of the well-known auto-backup names."""
    return bool(AUTO_BACKUP_PATTERN.match(name or ""))


@dataclass
class Album:
    """
    A remote album, or the placeholder for one that doesn't exist yet.

    ``album_id`` is None until the album has been created remotely.
    """

    title: str
    album_id: Optional[str] = None
    name: str = ""
    updated: Optional[datetime] = None

    @property
    def exists_remote(self) -> bool:
        """Check if the album exists in the remote store."""
        return self.album_id is not None

    @property
    def auto_backup(self) -> bool:
        """Check if the album name marks an auto-backup album."""
        return is_auto_backup_name(self.name or self.title)


@dataclass(frozen=True)
class RemoteItem:
    """A photo or video record in a remote album."""

    item_id: str
    name: str
    updated: datetime
    size: Optional[int] = None
    checksum: Optional[str] = None
    tags: frozenset[str] = field(default_factory=frozenset)
    media_type: str = "photo"
    content_parts: int = 1

    @property
    def key(self) -> str:
        return join_key(self.name)

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lower()

    @property
    def is_video(self) -> bool:
        """Videos carry more than one media-content part (preview + stream)."""
        return self.content_parts > 1


@dataclass(frozen=True)
class LocalFile:
    """A file snapshot taken from the local album directory."""

    path: Path
    size: int
    mtime: datetime

    @classmethod
    def from_path(cls, path: Path) -> "LocalFile":
        """Snapshot a file's size and modification time."""
        stat = path.stat()
        return cls(path=path, size=stat.st_size, mtime=mtime_of(path))

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def key(self) -> str:
        return join_key(self.name)

    @property
    def extension(self) -> str:
        return self.path.suffix.lower()

    def checksum(self) -> Optional[str]:
        """MD5 of the file content, None if the file is missing or unreadable."""
        return file_fingerprint(self.path)


@dataclass(frozen=True)
class LocalOnly:
    """A local file with no remote counterpart: a pending upload."""

    local: LocalFile

    @property
    def name(self) -> str:
        return self.local.name

    @property
    def remote(self) -> None:
        return None

    @property
    def local_path(self) -> Path:
        return self.local.path

    @property
    def latest_timestamp(self) -> datetime:
        return self.local.mtime


@dataclass(frozen=True)
class RemoteOnly:
    """A remote item with no local file: a pending download to ``target``."""

    remote: RemoteItem
    target: Path

    @property
    def name(self) -> str:
        return self.remote.name

    @property
    def local(self) -> None:
        return None

    @property
    def local_path(self) -> Path:
        return self.target

    @property
    def latest_timestamp(self) -> datetime:
        return self.remote.updated


@dataclass(frozen=True)
class Both:
    """A local file and a remote item sharing a name: a pending compare."""

    local: LocalFile
    remote: RemoteItem

    @property
    def name(self) -> str:
        return self.local.name

    @property
    def local_path(self) -> Path:
        return self.local.path

    @property
    def latest_timestamp(self) -> datetime:
        return max(as_utc(self.local.mtime), as_utc(self.remote.updated))


Candidate = Union[LocalOnly, RemoteOnly, Both]
