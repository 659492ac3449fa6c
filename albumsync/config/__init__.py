# AlbumSync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from albumsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from albumsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    get_state_path,
    load_config,
    save_config,
    validate_config_file,
)
from albumsync.config.schema import (
    AlbumSyncConfig,
    OutputConfig,
    RemoteConfig,
    SyncSettings,
)

__all__ = [
    # Schema
    "AlbumSyncConfig",
    "RemoteConfig",
    "SyncSettings",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "get_state_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
