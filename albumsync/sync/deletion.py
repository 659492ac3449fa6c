# AlbumSync Deletion Oracle
# Decide whether a candidate has been deleted on either side

import logging
from typing import Optional

from albumsync.sync.item import Candidate, LocalFile, RemoteItem
from albumsync.sync.protocols import LocalMetadata, TrashOracle
from albumsync.utils.hashing import file_fingerprint

logger = logging.getLogger(__name__)

DELETE_TAG = "delete"


def remote_identity(item: RemoteItem) -> Optional[str]:
    """Identity of a remote item for trash lookups: its checksum, if known."""
    return item.checksum or None


def local_identity(file: LocalFile) -> Optional[str]:
    """Identity of a local file for trash lookups, None if it can't be computed."""
    return file_fingerprint(file.path)


class DeletionOracle:
    """
    Multi-signal deletion detection for a single candidate.

    Signals are consulted in a fixed order and the first match wins:

    1. the remote item carries the ``delete`` tag;
    2. the remote item is already in the trash;
    3. (no remote item) the local sidecar metadata sets the delete flag;
    4. (no remote item) the local file's fingerprint is already in the trash.

    The local fingerprint is best effort: when it cannot be computed the
    signal is unknown and the candidate is not considered deleted.
    """

    def __init__(self, trash: Optional[TrashOracle], metadata: Optional[LocalMetadata]):
        self.trash = trash
        self.metadata = metadata

    def is_deleted(self, candidate: Candidate) -> bool:
        return self.reason(candidate) is not None

    def reason(self, candidate: Candidate) -> Optional[str]:
        """Return why the candidate counts as deleted, or None if it doesn't."""
        remote = candidate.remote
        if remote is not None:
            if DELETE_TAG in remote.tags:
                return "Tagged 'delete' remotely"

            identity = remote_identity(remote)
            if identity is not None and self._in_trash(identity):
                return "Remote item is in the recycle bin"

            return None

        local = candidate.local
        if self.metadata is not None:
            tags = self.metadata.read_tags(local.path)
            if tags is not None and tags.delete:
                return "Tagged 'delete' locally"

        identity = local_identity(local)
        if identity is None:
            logger.debug("No fingerprint for %s, assuming not deleted", local.path)
            return None

        if self._in_trash(identity):
            return "Local file was already deleted remotely"

        return None

    def _in_trash(self, identity: str) -> bool:
        return self.trash is not None and self.trash.is_in_trash(identity)
