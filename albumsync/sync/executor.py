# AlbumSync Plan Executor
# Runs a sync plan phase by phase: deletes, uploads, then downloads

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from albumsync.config.schema import SyncSettings
from albumsync.sync.actions import SyncDecision, SyncPlan
from albumsync.sync.item import Album, LocalFile
from albumsync.sync.protocols import ProgressSink, Recycler, RemoteStore
from albumsync.utils.paths import ensure_dir, free_space_ratio, touch_directory

logger = logging.getLogger(__name__)


class SyncPhase(str, Enum):
    """States of a plan execution."""

    PENDING = "pending"
    DELETING = "deleting"
    UPLOADING = "uploading"
    DOWNLOADING = "downloading"
    DONE = "done"
    CANCELLED = "cancelled"


class SyncPlanExecutor:
    """
    Executes a SyncPlan for one album.

    Phases run strictly in order, one item at a time. Cancellation is
    polled at the start of every phase and before every upload and every
    download; once observed, nothing further starts and completed items
    are kept. Deletions are not gated per item.
    """

    def __init__(
        self,
        store: RemoteStore,
        album: Album,
        directory: Path,
        *,
        settings: SyncSettings,
        progress: ProgressSink,
        recycler: Optional[Recycler] = None,
        disk_root: Optional[Path] = None,
    ):
        """
        Initialize executor.

        Args:
            store: Remote store to transfer with.
            album: Album being synchronised (created lazily on first upload).
            directory: Local album directory.
            settings: Sync policy (disk-space threshold).
            progress: Progress sink receiving messages and counters.
            recycler: Handles deletions; deletions are skipped without one.
            disk_root: Path whose volume is checked before downloads.
                       Defaults to the album directory.
        """
        self.store = store
        self.album = album
        self.directory = directory
        self.settings = settings
        self.progress = progress
        self.recycler = recycler
        self.disk_root = disk_root or directory
        self.phase = SyncPhase.PENDING
        self.uploads_attempted = 0
        self.recycled = 0

    def execute(self, plan: SyncPlan) -> SyncPhase:
        """
        Run every phase of the plan.

        Returns:
            The terminal phase: DONE, or CANCELLED if cancellation stopped it.
        """
        for phase, runner, queue in (
            (SyncPhase.DELETING, self._run_deletes, plan.deletes),
            (SyncPhase.UPLOADING, self._run_uploads, plan.uploads),
            (SyncPhase.DOWNLOADING, self._run_downloads, plan.downloads),
        ):
            if self._cancelled():
                return self.phase

            self.phase = phase
            runner(queue)

        if self.phase != SyncPhase.CANCELLED:
            self.phase = SyncPhase.DONE
        return self.phase

    def _cancelled(self) -> bool:
        if self.progress.is_cancelled():
            if self.phase != SyncPhase.CANCELLED:
                logger.info("Sync of %s cancelled during %s", self.album.title, self.phase.value)
            self.phase = SyncPhase.CANCELLED
            return True
        return False

    def _run_deletes(self, deletes: list[SyncDecision]) -> None:
        if not deletes:
            return

        if self.recycler is None:
            logger.warning("No recycle bin configured; leaving %d deleted items in place", len(deletes))
            return

        for decision in deletes:
            logger.info("Recycling %s (%s)", decision.name, decision.reason)
            self.recycler.recycle(decision.candidate)
            self.recycled += 1

    def _run_uploads(self, uploads: list[SyncDecision]) -> None:
        for decision in uploads:
            if self._cancelled():
                break

            candidate = decision.candidate
            local: LocalFile = candidate.local

            # Check that the album exists, create it if it doesn't
            if not self.album.exists_remote:
                self.album = self.store.ensure_album(self.album)

            self.progress.report(f"Uploading {self.album.title} : {candidate.name}...")
            self.uploads_attempted += 1

            try:
                uploaded = self.store.upload(local, candidate.remote, self.album, local.checksum())
            except Exception:
                logger.exception("Upload of %s failed", local.path)
                uploaded = False

            if uploaded:
                self.progress.add_outcome(0, 1, 0)
            else:
                self.progress.add_outcome(0, 0, 1)

        if self.uploads_attempted > 0:
            # One-time album date refresh from the newest local capture time
            self.store.set_album_capture_date(self.directory, self.album)

    def _has_disk_space(self) -> bool:
        threshold = self.settings.min_free_disk_percent
        ratio = free_space_ratio(self.disk_root)

        if ratio * 100.0 > threshold:
            return True

        message = f"Available disk space was less than {threshold:g}%. Skipping downloads."
        self.progress.set_status(message)
        logger.warning(message)
        return False

    def _run_downloads(self, downloads: list[SyncDecision]) -> None:
        for decision in downloads:
            if self._cancelled():
                break

            if not self._has_disk_space():
                break

            candidate = decision.candidate
            self.progress.report(f"Downloading {self.album.title} : {candidate.name}...")

            try:
                ensure_dir(self.directory)
                downloaded = self.store.download(candidate.local_path, candidate.remote)
            except Exception:
                logger.exception("Download of %s failed", candidate.name)
                downloaded = False

            if not downloaded:
                self.progress.add_outcome(0, 0, 1)
                self.progress.set_status("Download error. Aborting.")
                break

            # Directory timestamp follows its newest file
            if not touch_directory(self.directory):
                logger.debug("Unable to set modification date for %s", self.directory)
            self.progress.add_outcome(1, 0, 0)
