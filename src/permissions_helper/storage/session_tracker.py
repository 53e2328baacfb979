"""Session storage of permissions requested during this process lifetime."""

import logging
import threading
from typing import Iterable

logger = logging.getLogger(__name__)


class SessionTracker:
    """Insert-only set of permission identifiers requested this session.

    Membership means the identifier was part of at least one completed
    request batch. Nothing is persisted and nothing is ever removed, so the
    set lives exactly as long as the process (or the owning helper).

    Writers replace the underlying frozenset under a lock (copy-on-write);
    readers take the current reference without locking.

    Attributes:
        requested: Current snapshot of requested identifiers
    """

    def __init__(self, identifiers: Iterable[str] = ()) -> None:
        """Initialize tracker.

        Args:
            identifiers: Optional identifiers to seed the session with
        """
        self._lock = threading.Lock()
        self.requested: frozenset[str] = frozenset(identifiers)

    def contains(self, identifier: str) -> bool:
        """Check if a permission has already been requested this session.

        Args:
            identifier: Permission to check

        Returns:
            True if the permission was requested in a completed batch

        Examples:
            >>> tracker = SessionTracker()
            >>> tracker.contains("CAMERA")
            False
        """
        return identifier in self.requested

    def add_all(self, identifiers: Iterable[str]) -> None:
        """Record a batch of requested permissions.

        Args:
            identifiers: Permissions included in a completed batch
        """
        new = frozenset(identifiers)
        with self._lock:
            added = new - self.requested
            if not added:
                return
            self.requested = self.requested | added

        logger.debug(f"[SessionTracker] Recorded {sorted(added)} ({len(self.requested)} total)")

    def snapshot(self) -> frozenset[str]:
        """Return the identifiers requested so far."""
        return self.requested

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.requested

    def __len__(self) -> int:
        return len(self.requested)
