"""Caller-facing entry point for permission requests."""

import logging
import weakref
from typing import Iterable

from .config import Settings
from .coordinator.request_coordinator import RequestCoordinator
from .coordinator.result_slot import PermissionsListener
from .host.adapter import HostSurfaceAdapter
from .models.permission import Permission
from .storage.session_tracker import SessionTracker

logger = logging.getLogger(__name__)


class PermissionsHelper:
    """Requests permissions on host surfaces with a shared session memory.

    One RequestCoordinator is created per host surface and reused for later
    requests on that surface. All coordinators share the same SessionTracker,
    so once-per-session suppression spans every surface of the helper.

    Attributes:
        settings: Application settings
        tracker: Session tracker shared by all coordinators
    """

    def __init__(
        self,
        settings: Settings | None = None,
        tracker: SessionTracker | None = None,
    ) -> None:
        """Initialize helper.

        Args:
            settings: Application settings
            tracker: Session tracker. A fresh one is created when omitted.
        """
        self.settings = settings or Settings()
        self.tracker = tracker if tracker is not None else SessionTracker()
        self._coordinators: weakref.WeakKeyDictionary[HostSurfaceAdapter, RequestCoordinator] = (
            weakref.WeakKeyDictionary()
        )

    def coordinator_for(self, host: HostSurfaceAdapter) -> RequestCoordinator:
        """Get or create the coordinator bound to a host surface.

        The coordinator only holds a weak proxy to the host, so dropping the
        host also drops its coordinator.
        """
        coordinator = self._coordinators.get(host)
        if coordinator is None:
            coordinator = RequestCoordinator(weakref.proxy(host), self.tracker, self.settings)
            self._coordinators[host] = coordinator
            logger.debug(f"[PermissionsHelper] Created coordinator for {type(host).__name__}")
        return coordinator

    def in_flight(self, host: HostSurfaceAdapter) -> bool:
        """Return True if a request is in flight on the host surface."""
        coordinator = self._coordinators.get(host)
        return coordinator is not None and coordinator.in_flight

    def release(self, host: HostSurfaceAdapter) -> None:
        """Forget the coordinator of a host surface that is going away."""
        coordinator = self._coordinators.pop(host, None)
        if coordinator is not None and coordinator.in_flight:
            logger.warning(f"[PermissionsHelper] Released {type(host).__name__} with a request in flight")

    def request_permissions(
        self,
        host: HostSurfaceAdapter,
        identifiers: Iterable[str],
        enforce_once_per_session: bool | None,
        listener: PermissionsListener,
    ) -> None:
        """Request permissions and post the result to a listener.

        If the host does not support runtime prompting, or the app targets a
        capability level below runtime prompting, every permission is
        reported as granted without showing a dialog.

        Args:
            host: Host surface to request on
            identifiers: Permissions to request
            enforce_once_per_session: Only ask once per session for each
                permission. None uses the configured default.
            listener: Callback receiving the list of Permission records
        """
        if enforce_once_per_session is None:
            enforce_once_per_session = self.settings.default_enforce_once_per_session

        self.coordinator_for(host).request(list(identifiers), enforce_once_per_session, listener)

    async def request_permissions_async(
        self,
        host: HostSurfaceAdapter,
        identifiers: Iterable[str],
        enforce_once_per_session: bool | None = None,
    ) -> list[Permission]:
        """Request permissions and wait for the result.

        Args:
            host: Host surface to request on
            identifiers: Permissions to request
            enforce_once_per_session: Only ask once per session for each
                permission. None uses the configured default.

        Returns:
            List of Permission records
        """
        if enforce_once_per_session is None:
            enforce_once_per_session = self.settings.default_enforce_once_per_session

        return await self.coordinator_for(host).request_async(list(identifiers), enforce_once_per_session)

    def already_requested_in_session(self, identifier: str) -> bool:
        """Check if a permission has already been requested this session."""
        return self.tracker.contains(identifier)

    @staticmethod
    def is_runtime_prompting_supported(host: HostSurfaceAdapter) -> bool:
        """Return True if the host can prompt for permissions at runtime."""
        return host.is_runtime_prompting_supported()
