# AlbumSync Folder Remote Store
# A remote album store kept in a directory tree (one subdirectory per album)

import logging
import shutil
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from albumsync.exceptions import RemoteStoreError
from albumsync.sync.item import Album, LocalFile, RemoteItem, is_auto_backup_name
from albumsync.utils.hashing import file_hash
from albumsync.utils.paths import (
    ensure_dir,
    latest_mtime,
    list_visible_dirs,
    list_visible_files,
    mtime_of,
    safe_copy,
    unique_path,
)

logger = logging.getLogger(__name__)

ALBUM_META = ".album.yaml"
VIDEO_EXTENSIONS = frozenset({".mov", ".mp4", ".m4v", ".avi", ".3gp", ".mkv"})


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _derived_id(*parts: str) -> str:
    """Stable id for an album or item that has no stored metadata yet."""
    return uuid.uuid5(uuid.NAMESPACE_URL, "/".join(parts)).hex


def _parse_time(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class FolderRemoteStore:
    """
    Remote album store backed by a local directory.

    Each album is a subdirectory holding the item files and an
    ``.album.yaml`` with the album id, title, name, update time and per-item
    ids and tags. Directories and files without metadata get ids derived
    from their names; listing never writes, metadata is persisted only by
    uploads, trashing and album creation.
    """

    def __init__(self, root: Path, *, trash_title: str = "Recycle Bin"):
        """
        Initialize store.

        Args:
            root: Root directory of the store.
            trash_title: Title of the album that receives trashed items.
        """
        self.root = root
        self.trash_title = trash_title
        self._item_paths: dict[str, Path] = {}

    # Album metadata

    def _meta_path(self, directory: Path) -> Path:
        return directory / ALBUM_META

    def _read_meta(self, directory: Path) -> dict[str, Any]:
        path = self._meta_path(directory)
        data: Optional[dict[str, Any]] = None

        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise RemoteStoreError(f"Corrupt album metadata {path}: {e}") from e

        if not isinstance(data, dict):
            data = {"id": _derived_id(directory.name), "title": directory.name}

        data.setdefault("items", {})
        return data

    def _write_meta(self, directory: Path, data: dict[str, Any]) -> None:
        ensure_dir(directory)
        with open(self._meta_path(directory), "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def _album_from_meta(self, directory: Path, meta: dict[str, Any]) -> Album:
        updated = _parse_time(meta.get("updated"))
        if updated is None and list_visible_files(directory):
            updated = latest_mtime(directory)

        return Album(
            title=meta.get("title") or directory.name,
            album_id=str(meta["id"]),
            name=meta.get("name") or "",
            updated=updated,
        )

    def _album_dir(self, album: Album) -> Path:
        for directory in list_visible_dirs(self.root):
            if str(self._read_meta(directory).get("id")) == album.album_id:
                return directory
        raise RemoteStoreError(f"Album {album.title!r} ({album.album_id}) not found")

    def _touch_album(self, directory: Path, meta: dict[str, Any]) -> None:
        meta["updated"] = _now().isoformat()
        self._write_meta(directory, meta)

    # RemoteStore protocol

    def list_albums(self) -> list[Album]:
        albums = []
        for directory in list_visible_dirs(self.root):
            albums.append(self._album_from_meta(directory, self._read_meta(directory)))
        return albums

    def list_items(self, album: Album) -> list[RemoteItem]:
        directory = self._album_dir(album)
        meta = self._read_meta(directory)
        entries: dict[str, Any] = meta["items"]
        items = []

        for path in list_visible_files(directory):
            entry = entries.get(path.name)
            if not isinstance(entry, dict):
                entry = {"id": _derived_id(str(meta["id"]), path.name)}

            is_video = path.suffix.lower() in VIDEO_EXTENSIONS
            item = RemoteItem(
                item_id=str(entry["id"]),
                name=entry.get("title", path.name),
                updated=mtime_of(path),
                size=path.stat().st_size,
                checksum=file_hash(path),
                tags=frozenset(str(tag).lower() for tag in entry.get("tags") or []),
                media_type="video" if is_video else "photo",
                content_parts=2 if is_video else 1,
            )
            self._item_paths[item.item_id] = path
            items.append(item)

        return items

    def ensure_album(self, album: Album) -> Album:
        if album.exists_remote:
            return album

        directory = unique_path(self.root / album.title.replace("/", "_"))
        meta = {
            "id": uuid.uuid4().hex,
            "title": album.title,
            "name": album.name or album.title,
            "updated": _now().isoformat(),
            "items": {},
        }
        self._write_meta(directory, meta)
        logger.info("Created remote album %s", album.title)
        return self._album_from_meta(directory, meta)

    def upload(self, file: LocalFile, existing: Optional[RemoteItem], album: Album, checksum: Optional[str]) -> bool:
        directory = self._album_dir(album)
        name = existing.name if existing is not None else file.name
        dest = directory / name

        safe_copy(file.path, dest)

        if checksum is not None and file_hash(dest) != checksum:
            dest.unlink()
            raise RemoteStoreError(f"Checksum mismatch uploading {file.path}")

        meta = self._read_meta(directory)
        entry = meta["items"].get(name) or {}
        if existing is not None:
            entry["id"] = existing.item_id
        else:
            entry.setdefault("id", _derived_id(str(meta["id"]), name))
        meta["items"][name] = entry
        self._item_paths[entry["id"]] = dest
        self._touch_album(directory, meta)
        return True

    def download(self, dest: Path, item: RemoteItem) -> bool:
        source = self._item_paths.get(item.item_id)
        if source is None or not source.exists():
            raise RemoteStoreError(f"Item {item.name!r} ({item.item_id}) not found")

        safe_copy(source, dest)
        return True

    def set_album_capture_date(self, directory: Path, album: Album) -> None:
        album_dir = self._album_dir(album)
        meta = self._read_meta(album_dir)
        meta["capture_date"] = latest_mtime(directory).isoformat()
        self._write_meta(album_dir, meta)

    def is_auto_backup_album(self, album: Album) -> bool:
        return is_auto_backup_name(album.name or album.title)

    def item_identifier(self, item: RemoteItem) -> str:
        return item.item_id

    def trash_item(self, item: RemoteItem) -> None:
        source = self._item_paths.get(item.item_id)
        if source is None or not source.exists():
            raise RemoteStoreError(f"Item {item.name!r} ({item.item_id}) not found")

        trash = self._find_or_create_trash()
        source_meta = self._read_meta(source.parent)
        entry = source_meta["items"].pop(source.name, {"id": item.item_id})
        self._touch_album(source.parent, source_meta)

        dest = unique_path(trash / source.name)
        shutil.move(str(source), str(dest))

        trash_meta = self._read_meta(trash)
        trash_meta["items"][dest.name] = entry
        self._touch_album(trash, trash_meta)
        self._item_paths[item.item_id] = dest
        logger.info("Moved %s to %s", item.name, self.trash_title)

    def _find_or_create_trash(self) -> Path:
        for directory in list_visible_dirs(self.root):
            meta = self._read_meta(directory)
            if (meta.get("title") or directory.name).lower() == self.trash_title.lower():
                return directory

        album = self.ensure_album(Album(title=self.trash_title))
        return self._album_dir(album)
