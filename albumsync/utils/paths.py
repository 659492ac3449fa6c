# AlbumSync Path Utilities
# Directory listing, timestamps, disk space and safe file operations

import os
import shutil
from datetime import datetime, timezone
from pathlib import Path

# Timestamp reported for empty or missing directories
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path object.
    """
    path_str = str(path)
    # Expand ~ first, then environment variables
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(path_str).resolve()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_hidden(path: Path) -> bool:
    """Check if a path is hidden (dot-file convention)."""
    return path.name.startswith(".")


def list_visible_files(directory: Path) -> list[Path]:
    """
    List regular, non-hidden files directly inside a directory.

    The listing is not recursive. A missing directory yields an empty list.

    Args:
        directory: Directory to list.

    Returns:
        Sorted list of file paths.
    """
    if not directory.is_dir():
        return []

    return sorted(path for path in directory.iterdir() if path.is_file() and not is_hidden(path))


def list_visible_dirs(directory: Path) -> list[Path]:
    """List non-hidden subdirectories directly inside a directory."""
    if not directory.is_dir():
        return []

    return sorted(path for path in directory.iterdir() if path.is_dir() and not is_hidden(path))


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def mtime_of(path: Path) -> datetime:
    """Modification time of a path as an aware UTC datetime."""
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def latest_mtime(directory: Path) -> datetime:
    """
    Most recent modification time over the visible files of a directory.

    Args:
        directory: Directory to inspect.

    Returns:
        Latest file mtime, or EPOCH if the directory is empty or missing.
    """
    latest = EPOCH
    for path in list_visible_files(directory):
        latest = max(latest, mtime_of(path))
    return latest


def touch_directory(directory: Path) -> bool:
    """
    Set a directory's modification time to that of its newest file.

    Args:
        directory: Directory to update.

    Returns:
        True if the timestamp was set, False if there were no files or the
        filesystem refused the change.
    """
    files = list_visible_files(directory)
    if not files:
        return False

    newest = max(path.stat().st_mtime for path in files)
    try:
        os.utime(directory, (newest, newest))
    except OSError:
        return False
    return True


def free_space_ratio(path: Path) -> float:
    """
    Fraction of the volume holding ``path`` that is still free.

    Args:
        path: Any path on the volume (the nearest existing parent is used).

    Returns:
        free / total, between 0.0 and 1.0.
    """
    probe = path
    while not probe.exists() and probe != probe.parent:
        probe = probe.parent

    usage = shutil.disk_usage(probe)
    if usage.total == 0:
        return 0.0
    return usage.free / usage.total


def safe_copy(source: Path, dest: Path, *, preserve_metadata: bool = True) -> None:
    """
    Atomically copy a file.

    Uses a temporary file and atomic rename to prevent partial copies in
    case of failure.

    Args:
        source: Source file.
        dest: Destination file.
        preserve_metadata: Whether to preserve file metadata such as mtime.

    Raises:
        FileNotFoundError: If source doesn't exist.
    """
    if not source.exists():
        raise FileNotFoundError(f"Source does not exist: {source}")

    ensure_dir(dest.parent)

    # Temp file in the destination directory for atomic rename; hidden so
    # directory listings never pick it up
    temp_dest = dest.with_name(f".{dest.name}.tmp.{os.getpid()}")
    try:
        if preserve_metadata:
            shutil.copy2(source, temp_dest)
        else:
            shutil.copy(source, temp_dest)
        os.replace(temp_dest, dest)
    except OSError:
        # Cleanup on failure
        if temp_dest.exists():
            temp_dest.unlink()
        raise


def unique_path(path: Path) -> Path:
    """Return ``path`` or, if it exists, the first free ``name (n).ext`` variant."""
    if not path.exists():
        return path

    counter = 1
    while True:
        candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
        if not candidate.exists():
            return candidate
        counter += 1
