# AlbumSync Hashing Utilities
# Content checksums for change detection and trash fingerprinting

import hashlib
from pathlib import Path


def content_hash(content: str | bytes, *, algorithm: str = "md5") -> str:
    """
    Calculate hash of content.

    Args:
        content: String or bytes content.
        algorithm: Hash algorithm (default md5, as reported by photo stores).

    Returns:
        Hex digest of hash.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    hasher = hashlib.new(algorithm)
    hasher.update(content)
    return hasher.hexdigest()


def file_hash(path: Path, *, algorithm: str = "md5", chunk_size: int = 65536) -> str | None:
    """
    Calculate hash of file content.

    Args:
        path: Path to file.
        algorithm: Hash algorithm (default md5).
        chunk_size: Chunk size for reading large files.

    Returns:
        Hex digest of hash, or None if file doesn't exist.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    if not path.exists() or not path.is_file():
        return None

    hasher = hashlib.new(algorithm)

    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)

    return hasher.hexdigest()


def file_fingerprint(path: Path) -> str | None:
    """
    Best-effort content fingerprint of a local file.

    Returns None when the file is missing or unreadable instead of raising,
    so callers can treat the result as "unknown".
    """
    try:
        return file_hash(path)
    except OSError:
        return None
