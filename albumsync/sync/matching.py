# AlbumSync Item Matching
# Deduplicate remote items and pair them with local files by name

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from albumsync.exceptions import AlbumMetadataError
from albumsync.sync.item import Both, Candidate, LocalFile, LocalOnly, RemoteItem, RemoteOnly
from albumsync.utils.paths import list_visible_files

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Candidates for one album plus diagnostics from deduplication."""

    candidates: list[Candidate] = field(default_factory=list)
    discarded: int = 0


def group_remote_items(
    items: Iterable[RemoteItem],
    *,
    skip_extensions: Iterable[str] = (".mov",),
) -> tuple[dict[str, list[RemoteItem]], int]:
    """
    Group remote items by join key.

    Items with a skipped extension are dropped before grouping.

    Returns:
        Tuple of (key -> items sharing that key, number of skipped items).

    Raises:
        AlbumMetadataError: If an item has no name.
    """
    skip = {ext.lower() for ext in skip_extensions}
    groups: dict[str, list[RemoteItem]] = {}
    skipped = 0

    for item in items:
        if not item.name:
            raise AlbumMetadataError(f"Remote item {item.item_id!r} has no title")

        if item.extension in skip:
            logger.info("Skipping file %s with %s file extension.", item.name, item.extension)
            skipped += 1
            continue

        groups.setdefault(item.key, []).append(item)

    return groups, skipped


def pick_survivor(group: list[RemoteItem], identifier: Callable[[RemoteItem], str]) -> RemoteItem:
    """Pick the item with the lexicographically smallest identifier."""
    return min(group, key=identifier)


def scan_local_files(directory: Path, *, skip_extensions: Iterable[str] = (".mov",)) -> list[LocalFile]:
    """
    Snapshot the visible files of an album directory.

    Args:
        directory: Album directory (may not exist).
        skip_extensions: Extensions never synchronised.

    Returns:
        LocalFile snapshots sorted by name.
    """
    skip = {ext.lower() for ext in skip_extensions}
    files: list[LocalFile] = []

    for path in list_visible_files(directory):
        if path.suffix.lower() in skip:
            continue
        try:
            files.append(LocalFile.from_path(path))
        except FileNotFoundError:
            # Removed between listing and stat
            continue

    return files


def build_candidates(
    items: Iterable[RemoteItem],
    directory: Path,
    *,
    identifier: Callable[[RemoteItem], str],
    exclude_videos: bool = False,
    skip_extensions: Iterable[str] = (".mov",),
) -> MatchResult:
    """
    Pair remote items with local files into candidates.

    Remote items sharing a name keep only the one with the smallest
    identifier. Local files whose name matches no remote group become
    upload-only candidates and are placed first; uploads take priority
    over downloads.

    Args:
        items: Remote items of the album.
        directory: Local album directory.
        identifier: Stable identifier of a remote item.
        exclude_videos: Drop remote survivors that are videos.
        skip_extensions: Extensions never synchronised.

    Returns:
        MatchResult with ordered candidates and the duplicate discard count.
    """
    items = list(items)
    skip_extensions = list(skip_extensions)
    result = MatchResult()

    groups, skipped = group_remote_items(items, skip_extensions=skip_extensions)
    if skipped:
        logger.debug("Skipping %d remote items by extension in %s", skipped, directory.name)

    survivors: list[RemoteItem] = []
    for group in groups.values():
        survivors.append(pick_survivor(group, identifier))
        result.discarded += len(group) - 1

    if result.discarded > 0:
        logger.info("Ignoring %d duplicate photos of %d in %s", result.discarded, len(items), directory.name)

    local_files = scan_local_files(directory, skip_extensions=skip_extensions)
    local_by_key = {file.key: file for file in local_files}
    logger.debug("%d local files found in %s", len(local_files), directory)

    remote_candidates: list[Candidate] = []
    for item in sorted(survivors, key=lambda i: i.key):
        if exclude_videos and item.is_video:
            logger.info("Exclude videos enabled: skipping %s", item.name)
            continue

        local = local_by_key.get(item.key)
        if local is not None:
            remote_candidates.append(Both(local=local, remote=item))
        else:
            remote_candidates.append(RemoteOnly(remote=item, target=directory / item.name))

    # The group map is built before the video filter: a local copy of an
    # excluded video is neither uploaded nor downloaded
    upload_candidates: list[Candidate] = [LocalOnly(local=file) for file in local_files if file.key not in groups]

    result.candidates = upload_candidates + remote_candidates
    logger.debug("%d candidates found (new local + remote)", len(result.candidates))
    return result
