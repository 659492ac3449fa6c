# AlbumSync Sync State
# State management for tracking per-album sync history

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass
class AlbumState:
    """Last known sync of a single album."""

    title: str
    album_id: Optional[str] = None
    last_synced: Optional[str] = None  # ISO format datetime
    downloaded: int = 0
    uploaded: int = 0
    failed: int = 0

    @property
    def last_synced_at(self) -> Optional[datetime]:
        """Last sync time as an aware datetime."""
        if self.last_synced is None:
            return None
        value = datetime.fromisoformat(self.last_synced)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlbumState":
        """Create from dictionary."""
        return cls(
            title=data.get("title", ""),
            album_id=data.get("album_id"),
            last_synced=data.get("last_synced"),
            downloaded=data.get("downloaded", 0),
            uploaded=data.get("uploaded", 0),
            failed=data.get("failed", 0),
        )


@dataclass
class SyncState:
    """
    Sync state for all albums.

    Keyed by lowercased album title so a local directory finds its record
    before the remote album exists.
    """

    version: str = "1.0"
    last_sync: Optional[str] = None  # ISO format datetime
    albums: dict[str, AlbumState] = field(default_factory=dict)

    def get_album(self, title: str) -> Optional[AlbumState]:
        """Get state for an album."""
        return self.albums.get(title.lower())

    def set_album(
        self,
        title: str,
        album_id: Optional[str] = None,
        downloaded: int = 0,
        uploaded: int = 0,
        failed: int = 0,
    ) -> AlbumState:
        """Set or update state for an album."""
        album_state = AlbumState(
            title=title,
            album_id=album_id,
            last_synced=datetime.now(timezone.utc).isoformat(),
            downloaded=downloaded,
            uploaded=uploaded,
            failed=failed,
        )
        self.albums[title.lower()] = album_state
        return album_state

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "version": self.version,
            "last_sync": self.last_sync,
            "albums": {key: album.to_dict() for key, album in self.albums.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncState":
        """Create from dictionary."""
        albums = {}
        for key, album_data in (data.get("albums") or {}).items():
            albums[key] = AlbumState.from_dict(album_data)

        return cls(
            version=data.get("version", "1.0"),
            last_sync=data.get("last_sync"),
            albums=albums,
        )


class StateManager:
    """
    Manages sync state persistence.

    Handles loading, saving, and updating sync state.
    """

    def __init__(self, state_path: Optional[Path] = None):
        """
        Initialize state manager.

        Args:
            state_path: Path to state file. Defaults to ~/.config/albumsync/.sync_state.yaml
        """
        if state_path is None:
            state_path = Path.home() / ".config" / "albumsync" / ".sync_state.yaml"
        self.state_path = state_path
        self._state: Optional[SyncState] = None

    @property
    def state(self) -> SyncState:
        """Get current state, loading if necessary."""
        if self._state is None:
            self._state = self.load()
        return self._state

    def load(self) -> SyncState:
        """Load state from file."""
        if not self.state_path.exists():
            return SyncState()

        try:
            with open(self.state_path, encoding="utf-8") as f:
                # Try YAML first
                data = yaml.safe_load(f)
                if data is None:
                    return SyncState()
                return SyncState.from_dict(data)
        except yaml.YAMLError:
            # Try JSON for backward compatibility
            try:
                with open(self.state_path, encoding="utf-8") as f:
                    data = json.load(f)
                    return SyncState.from_dict(data)
            except json.JSONDecodeError:
                return SyncState()

    def save(self) -> None:
        """Save state to file."""
        # Ensure directory exists
        self.state_path.parent.mkdir(parents=True, exist_ok=True)

        # Update last sync time
        if self._state:
            self._state.last_sync = datetime.now(timezone.utc).isoformat()

            # Write as YAML
            with open(self.state_path, "w", encoding="utf-8") as f:
                yaml.dump(self._state.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def record_album(
        self,
        title: str,
        album_id: Optional[str] = None,
        downloaded: int = 0,
        uploaded: int = 0,
        failed: int = 0,
    ) -> AlbumState:
        """Record a finished album pass and save."""
        album_state = self.state.set_album(
            title=title,
            album_id=album_id,
            downloaded=downloaded,
            uploaded=uploaded,
            failed=failed,
        )
        self.save()
        return album_state

    def last_synced(self, title: str) -> Optional[datetime]:
        """Get the last sync time of an album."""
        album_state = self.state.get_album(title)
        return album_state.last_synced_at if album_state else None
