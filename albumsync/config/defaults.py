# AlbumSync Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "photo_root": "~/Pictures/albumsync",
    "remote": {
        "path": "~/.local/share/albumsync/remote",
        "trash_album": "Recycle Bin",
    },
    "sync": {
        "exclude_videos": False,
        "skip_extensions": [".mov"],
        "timestamp_tolerance": 2.0,
        "compare_checksums": True,
        "min_free_disk_percent": 2.0,
        "max_age_days": None,
    },
    "exclude_albums": [],
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": None,
    },
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# AlbumSync Configuration
#
# photo_root holds one subdirectory per album. Each subdirectory is
# reconciled with the remote album of the same title.
#
# sync:
#   exclude_videos:        skip remote videos entirely
#   skip_extensions:       never sync these file types (either direction)
#   timestamp_tolerance:   seconds within which timestamps count as equal
#   compare_checksums:     equal checksums mean "unchanged"
#   min_free_disk_percent: stop downloading below this much free space
#   max_age_days:          ignore items not changed within this many days

"""
    return header + yaml.dump(get_default_config(), default_flow_style=False, sort_keys=False, allow_unicode=True)
