# AlbumSync State Tests
# Tests for per-album sync state persistence

import json
from pathlib import Path

from albumsync.sync.state import AlbumState, StateManager, SyncState


class TestSyncState:
    """Tests for SyncState."""

    def test_album_keyed_by_title(self):
        state = SyncState()
        state.set_album("Holidays", album_id="1", uploaded=2)

        album_state = state.get_album("HOLIDAYS")
        assert album_state is not None
        assert album_state.uploaded == 2
        assert album_state.last_synced_at is not None

    def test_round_trip(self):
        state = SyncState(last_sync="2024-05-01T12:00:00+00:00")
        state.set_album("Holidays", album_id="1", downloaded=3, failed=1)

        restored = SyncState.from_dict(state.to_dict())

        assert restored.last_sync == state.last_sync
        assert restored.get_album("holidays") == state.get_album("holidays")

    def test_naive_timestamp_is_utc(self):
        album_state = AlbumState(title="x", last_synced="2024-05-01T12:00:00")
        assert album_state.last_synced_at.utcoffset().total_seconds() == 0


class TestStateManager:
    """Tests for StateManager."""

    def test_missing_file_gives_empty_state(self, temp_dir: Path):
        manager = StateManager(temp_dir / "state.yaml")
        assert manager.state.albums == {}
        assert manager.last_synced("Holidays") is None

    def test_record_album_persists(self, temp_dir: Path):
        path = temp_dir / "nested" / "state.yaml"
        StateManager(path).record_album(title="Holidays", album_id="1", uploaded=4)

        reloaded = StateManager(path)
        assert reloaded.state.get_album("holidays").uploaded == 4
        assert reloaded.last_synced("Holidays") is not None
        assert reloaded.state.last_sync is not None

    def test_legacy_json_state(self, temp_dir: Path):
        path = temp_dir / "state.yaml"
        path.write_text(
            json.dumps({"version": "1.0", "albums": {"holidays": {"title": "Holidays", "downloaded": 7}}}),
            encoding="utf-8",
        )
        assert StateManager(path).state.get_album("Holidays").downloaded == 7
