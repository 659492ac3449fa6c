# AlbumSync Local Metadata
# Per-file tags read from a YAML sidecar in each album directory

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from albumsync.sync.deletion import DELETE_TAG

logger = logging.getLogger(__name__)

SIDECAR_NAME = ".albumsync.yaml"


@dataclass(frozen=True)
class FileTags:
    """Tags attached to one local file."""

    tags: frozenset[str] = field(default_factory=frozenset)

    @property
    def delete(self) -> bool:
        return DELETE_TAG in self.tags


class SidecarMetadata:
    """
    Reads ``.albumsync.yaml`` sidecars.

    Layout::

        files:
          IMG_0001.jpg:
            tags: [delete]

    Missing or unreadable sidecars mean "no information" rather than an
    error. Sidecars are parsed once per directory.
    """

    def __init__(self) -> None:
        self._cache: dict[Path, dict[str, FileTags]] = {}

    def read_tags(self, file: Path) -> Optional[FileTags]:
        return self._load(file.parent).get(file.name.lower())

    def _load(self, directory: Path) -> dict[str, FileTags]:
        if directory not in self._cache:
            self._cache[directory] = _parse_sidecar(directory / SIDECAR_NAME)
        return self._cache[directory]

    def clear(self) -> None:
        self._cache.clear()


def _parse_sidecar(path: Path) -> dict[str, FileTags]:
    if not path.is_file():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable metadata %s: %s", path, e)
        return {}

    files: Any = (data or {}).get("files") if isinstance(data, dict) else None
    if not isinstance(files, dict):
        return {}

    result: dict[str, FileTags] = {}
    for name, entry in files.items():
        tags = entry.get("tags") if isinstance(entry, dict) else None
        if not isinstance(tags, list):
            continue
        result[str(name).lower()] = FileTags(tags=frozenset(str(tag).lower() for tag in tags))
    return result
