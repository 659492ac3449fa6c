# AlbumSync Test Fixtures
# Pytest fixtures for AlbumSync tests

import os
import tempfile
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pytest

from albumsync.config.schema import AlbumSyncConfig, RemoteConfig, SyncSettings
from albumsync.exceptions import RemoteStoreError
from albumsync.sync.item import Album, LocalFile, RemoteItem
from albumsync.sync.outcome import SyncOutcome

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A timestamp ``minutes`` after T0."""
    return T0 + timedelta(minutes=minutes)


class FakeStore:
    """In-memory RemoteStore that records every call."""

    def __init__(self, albums: Optional[list[Album]] = None, items: Optional[dict[str, list[RemoteItem]]] = None):
        self.albums: list[Album] = list(albums or [])
        self.items: dict[str, list[RemoteItem]] = dict(items or {})
        self.contents: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.created: list[Album] = []
        self.capture_dates: list[Optional[str]] = []
        self.fail_uploads: set[str] = set()
        self.fail_downloads: set[str] = set()
        self.raise_downloads: set[str] = set()

    def _names(self, kind: str) -> list[str]:
        return [name for call, name in self.calls if call == kind]

    @property
    def uploaded(self) -> list[str]:
        return [name for name in self._names("upload") if name not in self.fail_uploads]

    @property
    def downloaded(self) -> list[str]:
        return [name for name in self._names("download") if name not in self.fail_downloads | self.raise_downloads]

    @property
    def trashed(self) -> list[str]:
        return self._names("trash")

    def list_albums(self) -> list[Album]:
        return list(self.albums)

    def list_items(self, album: Album) -> list[RemoteItem]:
        return list(self.items.get(album.album_id, []))

    def ensure_album(self, album: Album) -> Album:
        if album.exists_remote:
            return album
        created = Album(title=album.title, album_id=f"new-{len(self.created) + 1}", name=album.name, updated=T0)
        self.created.append(created)
        self.albums.append(created)
        self.items[created.album_id] = []
        return created

    def upload(self, file: LocalFile, existing: Optional[RemoteItem], album: Album, checksum: Optional[str]) -> bool:
        self.calls.append(("upload", file.name))
        if file.name in self.fail_uploads:
            raise RemoteStoreError(f"Upload of {file.name} rejected")
        return True

    def download(self, dest: Path, item: RemoteItem) -> bool:
        self.calls.append(("download", item.name))
        if item.name in self.raise_downloads:
            raise RemoteStoreError(f"Download of {item.name} failed")
        if item.name in self.fail_downloads:
            return False
        dest.write_bytes(self.contents.get(item.item_id, b"remote content"))
        ts = item.updated.timestamp()
        os.utime(dest, (ts, ts))
        return True

    def set_album_capture_date(self, directory: Path, album: Album) -> None:
        self.capture_dates.append(album.album_id)

    def is_auto_backup_album(self, album: Album) -> bool:
        return album.auto_backup

    def item_identifier(self, item: RemoteItem) -> str:
        return item.item_id

    def trash_item(self, item: RemoteItem) -> None:
        self.calls.append(("trash", item.name))


class FakeTrash:
    """TrashOracle over a fixed set of identities."""

    def __init__(self, identities: Optional[set[str]] = None):
        self.identities = {identity.lower() for identity in identities or set()}
        self.lookups: list[str] = []

    def is_in_trash(self, identity: str) -> bool:
        self.lookups.append(identity)
        return identity.lower() in self.identities


class FakeRecycler:
    """Recycler that only records what it was asked to recycle."""

    def __init__(self):
        self.recycled: list[str] = []

    def recycle(self, candidate) -> None:
        self.recycled.append(candidate.name)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("ALBUMSYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory writing a file with a given modification time."""

    def _make(directory: Path, name: str, mtime: datetime = T0, content: bytes = b"local content") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_bytes(content)
        ts = mtime.timestamp()
        os.utime(path, (ts, ts))
        return path

    return _make


@pytest.fixture
def album_dir(temp_dir: Path) -> Path:
    """Local album directory (not created)."""
    return temp_dir / "photos" / "Holidays"


@pytest.fixture
def settings() -> SyncSettings:
    """Default sync settings."""
    return SyncSettings()


@pytest.fixture
def outcome() -> SyncOutcome:
    """Fresh session outcome."""
    return SyncOutcome()


@pytest.fixture
def album() -> Album:
    """An existing remote album."""
    return Album(title="Holidays", album_id="album-1", name="Holidays", updated=T0)


@pytest.fixture
def sample_config(temp_dir: Path) -> AlbumSyncConfig:
    """Configuration pointing at temporary directories."""
    photo_root = temp_dir / "photos"
    photo_root.mkdir(exist_ok=True)
    return AlbumSyncConfig(
        photo_root=str(photo_root),
        remote=RemoteConfig(path=str(temp_dir / "remote")),
    )
