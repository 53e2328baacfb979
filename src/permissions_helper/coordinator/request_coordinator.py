"""Coordinator for permission request batches on one host surface."""

import asyncio
import logging
from dataclasses import dataclass, field

from ..config import Settings
from ..exceptions import RequestInFlightError
from ..host.adapter import HostSurfaceAdapter
from ..models.permission import Permission, PromptResult
from ..storage.session_tracker import SessionTracker
from .classifier import Classifier
from .result_slot import PermissionsListener, ResultSlot

logger = logging.getLogger(__name__)


@dataclass
class RequestBatch:
    """In-flight state of one request() call."""

    requested: list[str]
    """All requested identifiers, deduplicated, in request order."""

    slot: ResultSlot
    """Where the consolidated result goes."""

    resolved: list[Permission] = field(default_factory=list)
    """Records known without a dialog."""

    pending: list[str] = field(default_factory=list)
    """Identifiers waiting for the host dialog."""


class RequestCoordinator:
    """Runs permission request batches against one host surface.

    Responsibilities:
    - Short-circuit hosts without runtime prompting
    - Classify permissions into resolved and pending
    - Send pending permissions to the host dialog and correlate its result
    - Deliver resolved records followed by prompted records, exactly once
    - Record requested permissions in the session tracker
    - Detach from the host surface when the batch ends

    Must be driven from a single coordination thread (the event loop thread).
    Only one batch can be in flight at a time.

    Attributes:
        host: Host surface this coordinator is bound to
        tracker: Session tracker, usually shared across coordinators
        settings: Application settings
        classifier: Classifier reading host and tracker state
    """

    def __init__(
        self,
        host: HostSurfaceAdapter,
        tracker: SessionTracker,
        settings: Settings | None = None,
    ) -> None:
        """Initialize coordinator.

        Args:
            host: Host surface to request permissions on
            tracker: Session tracker for once-per-session suppression
            settings: Application settings
        """
        self.host = host
        self.tracker = tracker
        self.settings = settings or Settings()
        self.classifier = Classifier(host, tracker)
        self._batch: RequestBatch | None = None

    @property
    def in_flight(self) -> bool:
        """True while a batch waits for the host dialog."""
        return self._batch is not None

    def request(
        self,
        identifiers: list[str],
        enforce_once_per_session: bool,
        listener: PermissionsListener,
    ) -> None:
        """Request permissions and post the result to a listener.

        The listener is called exactly once with one Permission per requested
        identifier. If nothing needs a dialog it is called before this method
        returns; otherwise it is called when the host reports back.

        Args:
            identifiers: Permissions to request
            enforce_once_per_session: Do not prompt again for permissions
                already requested this session
            listener: Callback receiving the list of Permission records

        Raises:
            RequestInFlightError: If a batch is already in flight
            ValueError: If an identifier is empty
        """
        if self._batch is not None:
            raise RequestInFlightError(
                f"A permission request is already in flight for {self._batch.pending}"
            )

        requested = list(dict.fromkeys(identifiers))
        if any(not identifier for identifier in requested):
            raise ValueError("Permission identifiers must be non-empty strings")

        batch = RequestBatch(requested=requested, slot=ResultSlot(listener))
        self._batch = batch
        self.host.attach(self)

        try:
            if not self._runtime_prompting_enabled():
                logger.info(f"[RequestCoordinator] Runtime prompting unavailable, granting {requested}")
                batch.resolved = [Permission(identifier, True, False) for identifier in requested]
                self._complete(batch)
                return

            classification = self.classifier.classify(requested, enforce_once_per_session)
            batch.resolved = classification.resolved
            batch.pending = classification.pending

            if not batch.pending:
                logger.info("[RequestCoordinator] All permissions resolved, no dialog needed")
                self._complete(batch)
                return

            logger.info(f"[RequestCoordinator] 🔐 Prompting for {batch.pending}")
            self.host.prompt_async(list(batch.pending), self.settings.request_code)

        except Exception as e:
            if self._batch is batch:
                logger.error(f"[RequestCoordinator] Request failed before delivery: {e}")
                self._release(batch)
            raise

    async def request_async(
        self,
        identifiers: list[str],
        enforce_once_per_session: bool,
    ) -> list[Permission]:
        """Request permissions and wait for the consolidated result.

        Args:
            identifiers: Permissions to request
            enforce_once_per_session: Do not prompt again for permissions
                already requested this session

        Returns:
            List of Permission records
        """
        future: asyncio.Future[list[Permission]] = asyncio.get_running_loop().create_future()

        def listener(records: list[Permission]) -> None:
            if not future.done():
                future.set_result(records)

        self.request(identifiers, enforce_once_per_session, listener)
        return await future

    def on_prompt_result(self, result: PromptResult) -> None:
        """Handle the host dialog outcome for the in-flight batch.

        Results with an unknown request code, or arriving when no batch is in
        flight, are ignored.

        Args:
            result: Parallel arrays reported by the host
        """
        if result.request_code != self.settings.request_code:
            logger.warning(f"[RequestCoordinator] Ignoring result with request code {result.request_code}")
            return

        batch = self._batch
        if batch is None:
            logger.warning(f"[RequestCoordinator] Ignoring result for {result.identifiers}: no request in flight")
            return

        prompted = result.to_permissions()
        for permission in prompted:
            logger.info(
                f"[RequestCoordinator] {permission.identifier}: granted={permission.granted}, "
                f"show_rationale={permission.show_rationale}"
            )

        batch.resolved.extend(prompted)
        batch.pending = []
        self._complete(batch)

    def _runtime_prompting_enabled(self) -> bool:
        """Check whether the host and the declared target level allow prompting."""
        if not self.host.is_runtime_prompting_supported():
            return False

        try:
            target_level = self.host.query_target_capability_level()
        except LookupError as e:
            logger.error(f"[RequestCoordinator] Error reading target capability level: {e}")
            target_level = None

        if target_level is None:
            logger.warning("[RequestCoordinator] Target capability level unknown, assuming runtime prompting")
            return True

        return target_level >= self.settings.runtime_prompting_level

    def _complete(self, batch: RequestBatch) -> None:
        """Deliver the batch result, record the session, release the surface."""
        try:
            batch.slot.deliver(batch.resolved)
            self.tracker.add_all(batch.requested)
        finally:
            self._release(batch)

    def _release(self, batch: RequestBatch) -> None:
        """Forget the batch and detach from the host surface."""
        if self._batch is batch:
            self._batch = None
        self.host.detach(self)
