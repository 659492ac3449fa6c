# AlbumSync Recycle Bin
# Trash membership lookups and moving deleted items out of the way

import logging
import shutil
from pathlib import Path
from typing import Optional

from albumsync.sync.deletion import remote_identity
from albumsync.sync.item import Album, Candidate
from albumsync.sync.protocols import RemoteStore
from albumsync.utils.paths import ensure_dir, unique_path

logger = logging.getLogger(__name__)

LOCAL_TRASH_DIR = ".trash"


class RecycleBin:
    """
    The store's trash album seen as a TrashOracle and a Recycler.

    Membership is by content checksum, so a photo deleted from one album
    is recognised when the same file turns up elsewhere. Recycled local
    files are moved to ``<photo_root>/.trash/<album>/`` rather than deleted.
    """

    def __init__(self, store: RemoteStore, trash_album: Album, photo_root: Path):
        self.store = store
        self.trash_album = trash_album
        self.photo_root = photo_root
        self._identities: Optional[set[str]] = None

    @property
    def local_trash(self) -> Path:
        return self.photo_root / LOCAL_TRASH_DIR

    def _load_identities(self) -> set[str]:
        if self._identities is None:
            self._identities = set()
            if self.trash_album.exists_remote:
                for item in self.store.list_items(self.trash_album):
                    identity = remote_identity(item)
                    if identity is not None:
                        self._identities.add(identity.lower())
            logger.debug("%d items in %s", len(self._identities), self.trash_album.title)
        return self._identities

    def is_in_trash(self, identity: str) -> bool:
        return identity.lower() in self._load_identities()

    def recycle(self, candidate: Candidate) -> None:
        """Move the remote item to the trash album and the local file to the local trash."""
        remote = candidate.remote
        if remote is not None:
            self.store.trash_item(remote)
            identity = remote_identity(remote)
            if identity is not None:
                self._load_identities().add(identity.lower())

        local_path = candidate.local_path
        if candidate.local is not None and local_path.exists():
            dest_dir = ensure_dir(self.local_trash / local_path.parent.name)
            dest = unique_path(dest_dir / local_path.name)
            shutil.move(str(local_path), str(dest))
            logger.info("Moved %s to %s", local_path, dest)
