# AlbumSync Utilities Module
# Helper functions for path handling and content hashing

from albumsync.utils.hashing import (
    content_hash,
    file_fingerprint,
    file_hash,
)
from albumsync.utils.paths import (
    EPOCH,
    as_utc,
    ensure_dir,
    expand_path,
    free_space_ratio,
    latest_mtime,
    list_visible_dirs,
    list_visible_files,
    mtime_of,
    safe_copy,
    touch_directory,
    unique_path,
)

__all__ = [
    # Paths
    "EPOCH",
    "as_utc",
    "expand_path",
    "ensure_dir",
    "list_visible_files",
    "list_visible_dirs",
    "mtime_of",
    "latest_mtime",
    "touch_directory",
    "free_space_ratio",
    "safe_copy",
    "unique_path",
    # Hashing
    "content_hash",
    "file_hash",
    "file_fingerprint",
]
