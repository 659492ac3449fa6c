# AlbumSync Collaborator Protocols
# Interfaces the sync core consumes; implementations live outside the core

from pathlib import Path
from typing import Optional, Protocol

from albumsync.sync.item import Album, Candidate, LocalFile, RemoteItem


class RemoteStore(Protocol):
    """A remote photo service holding albums of items."""

    def list_albums(self) -> list[Album]:
        """Return every album in the store."""
        ...

    def list_items(self, album: Album) -> list[RemoteItem]:
        """Return every item of an album."""
        ...

    def ensure_album(self, album: Album) -> Album:
        """Create the album if it doesn't exist yet; return the realized album."""
        ...

    def upload(self, file: LocalFile, existing: Optional[RemoteItem], album: Album, checksum: Optional[str]) -> bool:
        """Upload a local file, replacing ``existing`` when given."""
        ...

    def download(self, dest: Path, item: RemoteItem) -> bool:
        """Download an item to ``dest``."""
        ...

    def set_album_capture_date(self, directory: Path, album: Album) -> None:
        """Push the album date forward from the newest capture time in ``directory``."""
        ...

    def is_auto_backup_album(self, album: Album) -> bool:
        ...

    def item_identifier(self, item: RemoteItem) -> str:
        ...

    def trash_item(self, item: RemoteItem) -> None:
        """Move an item into the store's recycle album."""
        ...


class TrashOracle(Protocol):
    """Membership check against the collection of already-deleted items."""

    def is_in_trash(self, identity: str) -> bool:
        ...


class Recycler(Protocol):
    """Moves a candidate marked for deletion to the recycle bin."""

    def recycle(self, candidate: Candidate) -> None:
        ...


class FileTags(Protocol):
    """Per-file tags read from sidecar metadata."""

    @property
    def delete(self) -> bool:
        ...

    @property
    def tags(self) -> frozenset[str]:
        ...


class LocalMetadata(Protocol):
    """Best-effort reader of per-file metadata."""

    def read_tags(self, file: Path) -> Optional[FileTags]:
        """Return the file's tags, or None if no (readable) metadata exists."""
        ...


class ProgressSink(Protocol):
    """Receives progress messages and outcome counters; answers cancellation."""

    def report(self, message: str) -> None:
        ...

    def add_outcome(self, downloaded: int, uploaded: int, failed: int) -> None:
        ...

    def is_cancelled(self) -> bool:
        ...

    def set_status(self, message: str) -> None:
        ...
