# AlbumSync Album Pass
# Reconcile one local directory with one remote album

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from albumsync.config.schema import SyncSettings
from albumsync.exceptions import AlbumMetadataError
from albumsync.sync.actions import SyncPlan, build_plan
from albumsync.sync.deletion import DeletionOracle
from albumsync.sync.executor import SyncPhase, SyncPlanExecutor
from albumsync.sync.filters import filter_newer_than
from albumsync.sync.item import Album
from albumsync.sync.matching import build_candidates
from albumsync.sync.protocols import LocalMetadata, ProgressSink, Recycler, RemoteStore, TrashOracle
from albumsync.utils.paths import as_utc, latest_mtime

logger = logging.getLogger(__name__)


@dataclass
class AlbumSyncResult:
    """Result of one album pass."""

    title: str
    plan: SyncPlan = field(default_factory=SyncPlan)
    phase: SyncPhase = SyncPhase.PENDING
    downloaded: int = 0
    uploaded: int = 0
    failed: int = 0
    recycled: int = 0
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_message is None and self.failed == 0 and self.phase == SyncPhase.DONE

    @property
    def cancelled(self) -> bool:
        return self.phase == SyncPhase.CANCELLED


class AlbumSync:
    """
    Synchronisation of one album - a single work item.

    Pairs the album's remote items with the files of its local directory,
    decides an action per pair, and executes the resulting plan.
    """

    def __init__(
        self,
        album: Album,
        directory: Path,
        settings: SyncSettings,
        *,
        progress: ProgressSink,
        metadata: Optional[LocalMetadata] = None,
        disk_root: Optional[Path] = None,
    ):
        """
        Initialize an album pass.

        Args:
            album: Remote album (album_id None if not created yet).
            directory: Local album directory.
            settings: Sync policy.
            progress: Session progress sink and counters.
            metadata: Local sidecar metadata reader.
            disk_root: Path whose volume is checked before downloads.
        """
        self.album = album
        self.directory = directory
        self.settings = settings
        self.progress = progress
        self.metadata = metadata
        self.disk_root = disk_root

    def __repr__(self) -> str:
        return f"AlbumSync({self.directory.name!r}, {self.local_change_date().isoformat()})"

    def local_change_date(self) -> datetime:
        """
        Latest change on either side.

        Returns the album's remote update time when it is more recent than
        the newest local file, or when the local directory doesn't exist.
        """
        local_date = latest_mtime(self.directory)

        if self.album.exists_remote and self.album.updated is not None:
            remote_date = as_utc(self.album.updated)
            if not self.directory.exists() or remote_date > local_date:
                return remote_date

        return local_date

    def has_remote_album(self) -> bool:
        return self.album.exists_remote

    def album_title(self) -> str:
        """
        Return the album title.

        Raises:
            AlbumMetadataError: If the album has no title.
        """
        if not self.album.title:
            logger.error("Invalid title for album %s", self.album.album_id)
            raise AlbumMetadataError(f"Album {self.album.album_id!r} has no title")
        return self.album.title

    def plan(
        self,
        store: RemoteStore,
        cutoff: Optional[datetime] = None,
        trash: Optional[TrashOracle] = None,
    ) -> SyncPlan:
        """
        Build the plan for this album without executing it.

        Args:
            store: Remote store to list items from.
            cutoff: Only candidates changed after this are considered.
            trash: Oracle for items already deleted.

        Returns:
            SyncPlan partitioned into deletes, uploads and downloads.

        Raises:
            AlbumMetadataError: If the album or one of its items has no title.
        """
        title = self.album_title()
        self.progress.set_status(f"Querying remote for album {title}")

        items = store.list_items(self.album) if self.album.exists_remote else []

        match = build_candidates(
            items,
            self.directory,
            identifier=store.item_identifier,
            exclude_videos=self.settings.exclude_videos,
            skip_extensions=self.settings.skip_extensions,
        )

        candidates = filter_newer_than(match.candidates, cutoff)
        logger.debug("%d total candidates after date filter applied.", len(candidates))

        auto_backup = store.is_auto_backup_album(self.album)
        oracle = DeletionOracle(trash, self.metadata)

        plan = build_plan(candidates, oracle, self.settings, auto_backup)
        plan.discarded = match.discarded

        for decision in plan.unchanged:
            logger.debug("Photo %s was unchanged.", decision.name)

        return plan

    def process(
        self,
        store: RemoteStore,
        cutoff: Optional[datetime] = None,
        trash: Optional[TrashOracle] = None,
        recycler: Optional[Recycler] = None,
    ) -> AlbumSyncResult:
        """
        Run one full reconciliation pass for this album.

        Args:
            store: Remote store.
            cutoff: Only candidates changed after this are considered.
            trash: Oracle for items already deleted.
            recycler: Handles deletions; without one, deletions are only reported.

        Returns:
            AlbumSyncResult with the plan, terminal phase and per-album counters.

        Raises:
            AlbumMetadataError: If the album or one of its items has no title.
        """
        title = self.album_title()
        logger.info("Beginning sync for album: %s (Name: %s)", title, self.album.name)
        self.progress.report(f"Synchronising {title}...")

        plan = self.plan(store, cutoff, trash)

        counts = _CountingSink(self.progress)
        executor = SyncPlanExecutor(
            store,
            self.album,
            self.directory,
            settings=self.settings,
            progress=counts,
            recycler=recycler,
            disk_root=self.disk_root,
        )
        phase = executor.execute(plan)

        # Keep the realized album (it may have been created during uploads)
        self.album = executor.album

        return AlbumSyncResult(
            title=title,
            plan=plan,
            phase=phase,
            downloaded=counts.downloaded,
            uploaded=counts.uploaded,
            failed=counts.failed,
            recycled=executor.recycled,
        )


class _CountingSink:
    """Forwards to the session sink while counting this album's outcomes."""

    def __init__(self, inner: ProgressSink):
        self.inner = inner
        self.downloaded = 0
        self.uploaded = 0
        self.failed = 0

    def report(self, message: str) -> None:
        self.inner.report(message)

    def add_outcome(self, downloaded: int, uploaded: int, failed: int) -> None:
        self.downloaded += downloaded
        self.uploaded += uploaded
        self.failed += failed
        self.inner.add_outcome(downloaded, uploaded, failed)

    def is_cancelled(self) -> bool:
        return self.inner.is_cancelled()

    def set_status(self, message: str) -> None:
        self.inner.set_status(message)
