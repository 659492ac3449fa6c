# AlbumSync Date Filter
# Bound a sync pass to candidates changed after a cutoff

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from albumsync.sync.item import Candidate
from albumsync.utils.paths import as_utc


def is_newer_than(candidate: Candidate, cutoff: datetime) -> bool:
    """Check if the candidate's latest local or remote timestamp is strictly after ``cutoff``."""
    return as_utc(candidate.latest_timestamp) > as_utc(cutoff)


def filter_newer_than(candidates: Iterable[Candidate], cutoff: Optional[datetime]) -> list[Candidate]:
    """
    Drop candidates not changed after ``cutoff``, preserving order.

    Args:
        candidates: Candidates from matching.
        cutoff: Oldest timestamp of interest; None keeps everything.

    Returns:
        Candidates strictly newer than the cutoff.
    """
    if cutoff is None:
        return list(candidates)
    return [candidate for candidate in candidates if is_newer_than(candidate, cutoff)]
