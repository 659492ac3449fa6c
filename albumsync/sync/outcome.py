# AlbumSync Sync Outcome
# Session-scoped counters, cancellation flag and status text

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class SyncOutcome:
    """
    Running totals for one sync session.

    Created once per session and passed by reference to every album pass.
    Passes run sequentially, so the counters have a single writer and need
    no locking. Implements the ``ProgressSink`` protocol.
    """

    downloaded: int = 0
    uploaded: int = 0
    failed: int = 0
    cancelled: bool = False
    status: str = ""
    last_message: str = ""
    listener: Optional[Callable[[str], None]] = field(default=None, repr=False, compare=False)

    @property
    def total(self) -> int:
        """Number of items transferred or failed."""
        return self.downloaded + self.uploaded + self.failed

    @property
    def success(self) -> bool:
        return self.failed == 0 and not self.cancelled

    def report(self, message: str) -> None:
        """Record a progress message and forward it to the listener."""
        self.last_message = message
        logger.debug(message)
        if self.listener is not None:
            self.listener(message)

    def add_outcome(self, downloaded: int, uploaded: int, failed: int) -> None:
        self.downloaded += downloaded
        self.uploaded += uploaded
        self.failed += failed

    def is_cancelled(self) -> bool:
        return self.cancelled

    def cancel(self) -> None:
        """Ask the running pass to stop at its next check point."""
        self.cancelled = True

    def set_status(self, message: str) -> None:
        self.status = message
        if self.listener is not None:
            self.listener(message)
