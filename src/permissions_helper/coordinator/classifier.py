"""Split a permission batch into resolved and pending permissions."""

import logging
from dataclasses import dataclass, field

from ..host.adapter import HostSurfaceAdapter
from ..models.permission import Permission
from ..storage.session_tracker import SessionTracker

logger = logging.getLogger(__name__)


@dataclass
class Classification:
    """Outcome of classifying one batch."""

    resolved: list[Permission] = field(default_factory=list)
    """Permissions settled without a dialog, in input order."""

    pending: list[str] = field(default_factory=list)
    """Permissions that must be sent to the host dialog, in input order."""


class Classifier:
    """Decides which permissions need a host dialog.

    Reads host grant state and the session tracker; never mutates either.

    Attributes:
        host: Host surface to query grant state from
        tracker: Session tracker shared with the coordinator
    """

    def __init__(self, host: HostSurfaceAdapter, tracker: SessionTracker) -> None:
        self.host = host
        self.tracker = tracker

    def classify(self, identifiers: list[str], enforce_once_per_session: bool) -> Classification:
        """Partition identifiers into resolved and pending.

        A permission is resolved as granted when the host already grants it,
        or when once-per-session is enforced and it was requested earlier in
        this session. The latter holds even if that earlier request was
        denied, so the user is not prompted again.

        Args:
            identifiers: Permissions to classify, in request order
            enforce_once_per_session: Suppress permissions requested this session

        Returns:
            Classification with resolved records and pending identifiers

        Examples:
            >>> Classifier(host, SessionTracker()).classify(["CAMERA"], False)
            Classification(resolved=[], pending=['CAMERA'])
        """
        result = Classification()

        for identifier in identifiers:
            if self.host.query_granted(identifier):
                result.resolved.append(Permission(identifier, True, False))
            elif enforce_once_per_session and self.tracker.contains(identifier):
                logger.debug(f"[Classifier] {identifier} already requested this session, not prompting")
                result.resolved.append(Permission(identifier, True, False))
            else:
                result.pending.append(identifier)

        return result
