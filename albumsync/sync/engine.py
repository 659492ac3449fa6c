# AlbumSync Sync Engine
# Main synchronization engine coordinating all albums

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from albumsync.config.schema import AlbumSyncConfig
from albumsync.exceptions import AlbumSyncError
from albumsync.sync.actions import SyncPlan
from albumsync.sync.album import AlbumSync, AlbumSyncResult
from albumsync.sync.executor import SyncPhase
from albumsync.sync.item import Album
from albumsync.sync.outcome import SyncOutcome
from albumsync.sync.protocols import LocalMetadata, RemoteStore
from albumsync.sync.recycle import RecycleBin
from albumsync.sync.state import StateManager
from albumsync.utils.paths import list_visible_dirs

logger = logging.getLogger(__name__)

# Characters that can't appear in a directory name
_UNSAFE_CHARS = str.maketrans({"/": "_", "\\": "_", ":": "_", "\0": "_"})


def directory_name(title: str) -> str:
    """Local directory name for an album title."""
    return title.translate(_UNSAFE_CHARS).strip() or "_"


@dataclass
class SyncResult:
    """Result of a complete sync operation."""

    success: bool
    total_albums: int = 0
    synced_albums: int = 0
    skipped_albums: list[str] = field(default_factory=list)
    downloaded: int = 0
    uploaded: int = 0
    failed: int = 0
    aborted: bool = False
    album_results: dict[str, AlbumSyncResult] = field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        """Check if there were any failures."""
        return self.failed > 0 or any(r.error_message for r in self.album_results.values())


class SyncEngine:
    """
    Main synchronization engine.

    Pairs remote albums with the subdirectories of the local photo root and
    runs one AlbumSync pass per album, strictly one after another.
    """

    def __init__(
        self,
        config: AlbumSyncConfig,
        store: RemoteStore,
        *,
        state_manager: Optional[StateManager] = None,
        outcome: Optional[SyncOutcome] = None,
        metadata: Optional[LocalMetadata] = None,
    ):
        """
        Initialize sync engine.

        Args:
            config: AlbumSync configuration.
            store: Remote album store.
            state_manager: Optional state manager (creates new one if not provided).
            outcome: Session counters shared by every album pass.
            metadata: Local sidecar metadata reader.
        """
        self.config = config
        self.store = store
        self.photo_root = config.photo_root_path
        self.state_manager = state_manager or StateManager()
        self.outcome = outcome or SyncOutcome()
        self.metadata = metadata
        self._recycle_bin: Optional[RecycleBin] = None

    @property
    def recycle_bin(self) -> RecycleBin:
        """Trash oracle and recycler over the store's trash album."""
        if self._recycle_bin is None:
            trash_title = self.config.remote.trash_album
            trash_album = next(
                (album for album in self.store.list_albums() if album.title.lower() == trash_title.lower()),
                Album(title=trash_title),
            )
            self._recycle_bin = RecycleBin(self.store, trash_album, self.photo_root)
        return self._recycle_bin

    def cutoff(self, now: Optional[datetime] = None) -> Optional[datetime]:
        """Oldest change of interest, from ``sync.max_age_days``."""
        days = self.config.sync.max_age_days
        if days is None:
            return None
        return (now or datetime.now(timezone.utc)) - timedelta(days=days)

    def pair_albums(self) -> list[AlbumSync]:
        """
        Pair remote albums with local album directories.

        Albums are identified by their remote id. When several remote albums
        share a title, only the one with the smallest id is paired and the
        collision is logged. Local directories without a remote album get a
        placeholder album that is created on first upload.

        Returns:
            AlbumSync work items, most recently changed first.
        """
        trash_title = self.config.remote.trash_album.lower()
        remote_by_title: dict[str, Album] = {}

        for album in sorted(self.store.list_albums(), key=lambda a: a.album_id or ""):
            key = album.title.lower()
            if key == trash_title or self.config.is_album_excluded(album.title):
                continue
            if key in remote_by_title:
                logger.warning(
                    "Albums %s and %s share the title %r; syncing only %s",
                    remote_by_title[key].album_id,
                    album.album_id,
                    album.title,
                    remote_by_title[key].album_id,
                )
                continue
            remote_by_title[key] = album

        syncs: dict[str, AlbumSync] = {}
        for album in remote_by_title.values():
            directory = self.photo_root / directory_name(album.title)
            syncs[directory.name.lower()] = self._make_sync(album, directory)

        for directory in list_visible_dirs(self.photo_root):
            key = directory.name.lower()
            if key in syncs or key == trash_title or self.config.is_album_excluded(directory.name):
                continue
            syncs[key] = self._make_sync(Album(title=directory.name), directory)

        return sorted(syncs.values(), key=lambda s: s.local_change_date(), reverse=True)

    def _make_sync(self, album: Album, directory: Path) -> AlbumSync:
        return AlbumSync(
            album,
            directory,
            self.config.sync,
            progress=self.outcome,
            metadata=self.metadata,
            disk_root=self.photo_root,
        )

    def _select(self, album_title: Optional[str]) -> list[AlbumSync]:
        syncs = self.pair_albums()
        if album_title is None:
            return syncs

        selected = [s for s in syncs if s.album.title.lower() == album_title.lower()]
        if not selected:
            raise KeyError(f"Album '{album_title}' not found")
        return selected

    def get_status(self, album_title: Optional[str] = None) -> dict[str, SyncPlan]:
        """
        Build plans without executing them.

        Args:
            album_title: Optional specific album. If None, plans all albums.

        Returns:
            Dict of album title to plan.
        """
        plans: dict[str, SyncPlan] = {}
        cutoff = self.cutoff()

        for album_sync in self._select(album_title):
            plans[album_sync.album_title()] = album_sync.plan(self.store, cutoff, self.recycle_bin)

        return plans

    def is_up_to_date(self, album_sync: AlbumSync) -> bool:
        """Check if nothing changed on either side since the album's last sync."""
        last_synced = self.state_manager.last_synced(album_sync.album.title)
        if last_synced is None:
            return False
        return album_sync.local_change_date() <= last_synced

    def sync(
        self,
        *,
        album_title: Optional[str] = None,
        force: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """
        Synchronize albums.

        Args:
            album_title: Optional specific album. If None, syncs all albums.
            force: Sync albums even if nothing changed since their last sync.
            dry_run: Only plan; don't transfer anything.

        Returns:
            SyncResult with details of what was done.
        """
        result = SyncResult(success=True)
        album_syncs = self._select(album_title)
        result.total_albums = len(album_syncs)
        cutoff = self.cutoff()

        for album_sync in album_syncs:
            if self.outcome.is_cancelled():
                result.aborted = True
                break

            title = album_sync.album.title or str(album_sync.album.album_id)

            if not force and self.is_up_to_date(album_sync):
                logger.debug("Album %s unchanged since last sync, skipping", title)
                result.skipped_albums.append(title)
                continue

            try:
                if dry_run:
                    plan = album_sync.plan(self.store, cutoff, self.recycle_bin)
                    album_result = AlbumSyncResult(title=title, plan=plan, phase=SyncPhase.DONE)
                else:
                    album_result = album_sync.process(self.store, cutoff, self.recycle_bin, self.recycle_bin)
            except (AlbumSyncError, OSError) as e:
                logger.error("Sync of album %s failed: %s", title, e)
                album_result = AlbumSyncResult(title=title, error_message=str(e))

            result.album_results[title] = album_result

            if album_result.cancelled:
                result.aborted = True
                break

            if album_result.success:
                result.synced_albums += 1
                if not dry_run:
                    self.state_manager.record_album(
                        title=album_sync.album.title,
                        album_id=album_sync.album.album_id,
                        downloaded=album_result.downloaded,
                        uploaded=album_result.uploaded,
                        failed=album_result.failed,
                    )
            else:
                result.success = False

        if result.aborted:
            result.success = False

        result.downloaded = self.outcome.downloaded
        result.uploaded = self.outcome.uploaded
        result.failed = self.outcome.failed
        return result
