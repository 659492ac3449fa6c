# AlbumSync Config Tests
# Tests for configuration loading and validation

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from albumsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from albumsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    get_state_path,
    load_config,
    save_config,
    validate_config_file,
)
from albumsync.config.schema import AlbumSyncConfig, SyncSettings


class TestAlbumSyncConfig:
    """Tests for AlbumSyncConfig schema."""

    def test_minimal_config(self, temp_dir: Path):
        """Test minimal valid configuration."""
        config = AlbumSyncConfig(photo_root=str(temp_dir), remote={"path": str(temp_dir / "remote")})
        assert config.photo_root_path == temp_dir
        assert config.remote.trash_album == "Recycle Bin"
        assert config.sync.skip_extensions == [".mov"]
        assert config.exclude_albums == []

    def test_path_expansion(self, temp_home: Path):
        """Test that ~ is expanded in paths."""
        config = AlbumSyncConfig(photo_root="~/Pictures", remote={"path": "~/remote"})
        assert config.photo_root == str(temp_home / "Pictures")
        assert config.remote.path == str(temp_home / "remote")

    def test_album_exclusion_case_insensitive(self, temp_dir: Path):
        config = AlbumSyncConfig(
            photo_root=str(temp_dir),
            remote={"path": str(temp_dir)},
            exclude_albums=["Private"],
        )
        assert config.is_album_excluded("PRIVATE")
        assert not config.is_album_excluded("Public")

    def test_remote_required(self, temp_dir: Path):
        with pytest.raises(ValidationError):
            AlbumSyncConfig(photo_root=str(temp_dir))


class TestSyncSettings:
    """Tests for SyncSettings schema."""

    def test_defaults(self):
        settings = SyncSettings()
        assert settings.exclude_videos is False
        assert settings.timestamp_tolerance == 2.0
        assert settings.min_free_disk_percent == 2.0
        assert settings.max_age_days is None

    def test_extension_normalization(self):
        settings = SyncSettings(skip_extensions=["MOV", ".AVI"])
        assert settings.skip_extensions == [".mov", ".avi"]

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            SyncSettings(max_age_days=0)
        with pytest.raises(ValidationError):
            SyncSettings(min_free_disk_percent=150)
        with pytest.raises(ValidationError):
            SyncSettings(timestamp_tolerance=-1)


class TestConfigLoader:
    """Tests for configuration loading."""

    def test_load_missing_file(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError, match="albumsync config init"):
            load_config(temp_dir / "missing.yaml")

    def test_load_merges_defaults(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text(
            yaml.dump({"photo_root": str(temp_dir), "remote": {"path": str(temp_dir)}, "sync": {"max_age_days": 30}}),
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.sync.max_age_days == 30
        assert config.sync.min_free_disk_percent == 2.0
        assert config.remote.trash_album == "Recycle Bin"

    def test_save_and_load(self, temp_dir: Path):
        config = AlbumSyncConfig(photo_root=str(temp_dir), remote={"path": str(temp_dir)}, exclude_albums=["x"])
        path = save_config(config, temp_dir / "nested" / "config.yaml")

        assert load_config(path) == config

    def test_env_override(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ALBUMSYNC_CONFIG", str(temp_dir / "custom.yaml"))
        assert get_config_path() == temp_dir / "custom.yaml"

    def test_default_paths(self, temp_home: Path):
        assert get_config_path() == temp_home / ".config" / "albumsync" / "config.yaml"
        assert get_state_path() == temp_home / ".config" / "albumsync" / ".sync_state.yaml"

    def test_ensure_config_exists(self, temp_dir: Path):
        path = temp_dir / "config.yaml"

        assert ensure_config_exists(path) == (path, True)
        assert ensure_config_exists(path) == (path, False)
        assert validate_config_file(path) == (True, [])


class TestValidateConfig:
    """Tests for validate_config_file."""

    def test_missing_file(self, temp_dir: Path):
        valid, errors = validate_config_file(temp_dir / "missing.yaml")
        assert not valid
        assert "not found" in errors[0]

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert validate_config_file(path) == (False, ["Configuration file is empty"])

    def test_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("photo_root: [unclosed", encoding="utf-8")
        valid, errors = validate_config_file(path)
        assert not valid
        assert "Invalid YAML" in errors[0]

    def test_missing_sections(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("exclude_albums: []\n", encoding="utf-8")
        valid, errors = validate_config_file(path)
        assert not valid
        assert "Missing 'photo_root' setting" in errors
        assert "Missing 'remote' section" in errors

    def test_invalid_value(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text(
            yaml.dump({"photo_root": str(temp_dir), "remote": {"path": "x"}, "sync": {"max_age_days": -3}}),
            encoding="utf-8",
        )
        valid, errors = validate_config_file(path)
        assert not valid
        assert any(error.startswith("sync -> max_age_days") for error in errors)


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config_is_valid(self):
        config = AlbumSyncConfig.model_validate(DEFAULT_CONFIG)
        assert config.remote.trash_album == "Recycle Bin"

    def test_generated_yaml(self):
        content = generate_default_config()
        assert content.startswith("# AlbumSync Configuration")
        data = yaml.safe_load(content)
        assert data == DEFAULT_CONFIG
