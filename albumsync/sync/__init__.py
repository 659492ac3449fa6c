# AlbumSync Sync Module
# Core reconciliation engine and components

from albumsync.sync.actions import ActionType, SyncDecision, SyncPlan, build_plan, classify, decide
from albumsync.sync.album import AlbumSync, AlbumSyncResult
from albumsync.sync.deletion import DeletionOracle
from albumsync.sync.engine import SyncEngine, SyncResult
from albumsync.sync.executor import SyncPhase, SyncPlanExecutor
from albumsync.sync.filters import filter_newer_than
from albumsync.sync.item import Album, Both, Candidate, LocalFile, LocalOnly, RemoteItem, RemoteOnly
from albumsync.sync.matching import MatchResult, build_candidates
from albumsync.sync.outcome import SyncOutcome
from albumsync.sync.recycle import RecycleBin
from albumsync.sync.state import StateManager, SyncState

__all__ = [
    # Items
    "Album",
    "RemoteItem",
    "LocalFile",
    "LocalOnly",
    "RemoteOnly",
    "Both",
    "Candidate",
    # Matching & filtering
    "MatchResult",
    "build_candidates",
    "filter_newer_than",
    # Decisions
    "DeletionOracle",
    "ActionType",
    "SyncDecision",
    "SyncPlan",
    "build_plan",
    "classify",
    "decide",
    # Execution
    "SyncPhase",
    "SyncPlanExecutor",
    "SyncOutcome",
    "RecycleBin",
    # Album & engine
    "AlbumSync",
    "AlbumSyncResult",
    "SyncEngine",
    "SyncResult",
    # State
    "SyncState",
    "StateManager",
]
