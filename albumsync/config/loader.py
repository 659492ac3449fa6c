# AlbumSync Configuration Loader
# Load, save, and manage YAML configuration files

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from albumsync.config.defaults import generate_default_config, get_default_config
from albumsync.config.schema import AlbumSyncConfig


def get_config_dir() -> Path:
    """Get the AlbumSync configuration directory."""
    return Path.home() / ".config" / "albumsync"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("ALBUMSYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def get_state_path() -> Path:
    """Get the path to the persisted sync state."""
    return get_config_path().parent / ".sync_state.yaml"


def load_config(config_path: Optional[Path] = None) -> AlbumSyncConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        AlbumSyncConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\nRun 'albumsync config init' to create one."
        )

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    # Merge with defaults for missing values
    merged = _merge_with_defaults(data)

    return AlbumSyncConfig.model_validate(merged)


def save_config(config: AlbumSyncConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without loading it into the system.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]

    errors: list[str] = []

    if "photo_root" not in data:
        errors.append("Missing 'photo_root' setting")

    if "remote" not in data:
        errors.append("Missing 'remote' section")

    try:
        AlbumSyncConfig.model_validate(_merge_with_defaults(data))
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

    return len(errors) == 0, errors


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = get_default_config()

    for key, value in data.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = {**result[key], **value}
        else:
            result[key] = value

    return result
