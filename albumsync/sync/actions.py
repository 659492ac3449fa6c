# AlbumSync Sync Actions
# Action types, per-candidate classification and the partitioned plan

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from albumsync.config.schema import SyncSettings
from albumsync.sync.deletion import DeletionOracle
from albumsync.sync.item import Both, Candidate, LocalOnly, RemoteOnly
from albumsync.utils.paths import as_utc


class ActionType(str, Enum):
    """Types of sync actions."""

    # No action needed
    UNCHANGED = "unchanged"

    # Transfers
    UPLOAD = "upload"
    DOWNLOAD = "download"

    # Move to the recycle bin
    DELETE = "delete"


@dataclass(frozen=True)
class SyncDecision:
    """The action chosen for one candidate and why."""

    candidate: Candidate
    action: ActionType
    reason: str = ""

    @property
    def name(self) -> str:
        return self.candidate.name


def _compare(candidate: Both, settings: SyncSettings, auto_backup: bool) -> tuple[ActionType, str]:
    """Compare a local file with its remote counterpart."""
    local, remote = candidate.local, candidate.remote

    if settings.compare_checksums and remote.checksum:
        local_checksum = local.checksum()
        if local_checksum is not None and local_checksum.lower() == remote.checksum.lower():
            return ActionType.UNCHANGED, "Checksums match"

    delta = (as_utc(local.mtime) - as_utc(remote.updated)).total_seconds()

    if abs(delta) <= settings.timestamp_tolerance:
        return ActionType.UNCHANGED, "Timestamps match"

    if delta < 0:
        return ActionType.DOWNLOAD, "Remote copy is newer"

    if auto_backup:
        # Items in auto-backup albums are originals; never overwrite them
        return ActionType.UNCHANGED, "Local copy is newer but album is an auto-backup album"

    return ActionType.UPLOAD, "Local copy is newer"


def decide(candidate: Candidate, settings: SyncSettings, auto_backup: bool) -> SyncDecision:
    """
    Classify a candidate that is known not to be deleted.

    Args:
        candidate: The candidate to classify.
        settings: Comparison policy (checksums, timestamp tolerance).
        auto_backup: Whether the album is an auto-backup album.

    Returns:
        SyncDecision with UPLOAD, DOWNLOAD or UNCHANGED.
    """
    if isinstance(candidate, LocalOnly):
        return SyncDecision(candidate, ActionType.UPLOAD, "New local file")

    if isinstance(candidate, RemoteOnly):
        return SyncDecision(candidate, ActionType.DOWNLOAD, "New remote item")

    action, reason = _compare(candidate, settings, auto_backup)
    return SyncDecision(candidate, action, reason)


def classify(candidate: Candidate, settings: SyncSettings, auto_backup: bool) -> ActionType:
    """Shorthand for ``decide(...).action``."""
    return decide(candidate, settings, auto_backup).action


@dataclass
class SyncPlan:
    """Decisions for one album, partitioned into ordered work queues."""

    deletes: list[SyncDecision] = field(default_factory=list)
    uploads: list[SyncDecision] = field(default_factory=list)
    downloads: list[SyncDecision] = field(default_factory=list)
    unchanged: list[SyncDecision] = field(default_factory=list)
    discarded: int = 0

    @property
    def decisions(self) -> list[SyncDecision]:
        return self.deletes + self.uploads + self.downloads + self.unchanged

    @property
    def has_changes(self) -> bool:
        return bool(self.deletes or self.uploads or self.downloads)

    @property
    def total(self) -> int:
        return len(self.deletes) + len(self.uploads) + len(self.downloads) + len(self.unchanged)

    def add(self, decision: SyncDecision) -> None:
        if decision.action == ActionType.DELETE:
            self.deletes.append(decision)
        elif decision.action == ActionType.UPLOAD:
            self.uploads.append(decision)
        elif decision.action == ActionType.DOWNLOAD:
            self.downloads.append(decision)
        else:
            self.unchanged.append(decision)


def build_plan(
    candidates: Iterable[Candidate],
    oracle: DeletionOracle,
    settings: SyncSettings,
    auto_backup: bool,
) -> SyncPlan:
    """
    Assign exactly one action to every candidate.

    Deletion is decided first; a deleted candidate never reaches the
    classifier. Queue order follows candidate order.
    """
    plan = SyncPlan()

    for candidate in candidates:
        reason = oracle.reason(candidate)
        if reason is not None:
            plan.add(SyncDecision(candidate, ActionType.DELETE, reason))
            continue

        plan.add(decide(candidate, settings, auto_backup))

    return plan
