"""Abstract host surface boundary."""

import logging
from abc import ABC, abstractmethod
from typing import Protocol

from ..models.permission import PromptResult

logger = logging.getLogger(__name__)


class PromptResultReceiver(Protocol):
    """Coordination unit attached to a host surface while a batch runs."""

    def on_prompt_result(self, result: PromptResult) -> None:
        """Receive the outcome of a host permission dialog."""
        ...


class HostSurfaceAdapter(ABC):
    """Host capabilities needed to request permissions.

    Subclasses answer grant-state queries synchronously and run the
    interactive dialog asynchronously. When the dialog finishes they call
    emit_result(), which routes the outcome to the attached receiver.

    Attributes:
        receiver: Currently attached coordination unit, if any
    """

    def __init__(self) -> None:
        self.receiver: PromptResultReceiver | None = None

    @abstractmethod
    def query_granted(self, identifier: str) -> bool:
        """Return True if the permission is currently granted."""

    @abstractmethod
    def query_show_rationale(self, identifier: str) -> bool:
        """Return True if the user has not permanently blocked future prompts.

        Valid immediately after a denial.
        """

    @abstractmethod
    def query_target_capability_level(self) -> int | None:
        """Return the app's declared target capability level.

        Returns:
            Level number, or None when it cannot be determined. Implementations
            may also raise LookupError on lookup failure.
        """

    @abstractmethod
    def is_runtime_prompting_supported(self) -> bool:
        """Return True if the host can prompt for permissions at runtime."""

    @abstractmethod
    def prompt_async(self, identifiers: list[str], request_code: int) -> None:
        """Start the host permission dialog without waiting for it.

        Must lead to exactly one emit_result() call with the same request
        code and the identifiers in the same order.

        Args:
            identifiers: Permissions to prompt for
            request_code: Correlation token to echo back
        """

    def attach(self, receiver: PromptResultReceiver) -> None:
        """Attach the coordination unit that will receive dialog results."""
        self.receiver = receiver
        logger.debug(f"[{type(self).__name__}] Attached {type(receiver).__name__}")

    def detach(self, receiver: PromptResultReceiver) -> None:
        """Detach a coordination unit. Safe to call more than once."""
        if self.receiver is receiver:
            self.receiver = None
            logger.debug(f"[{type(self).__name__}] Detached {type(receiver).__name__}")

    def emit_result(self, request_code: int, identifiers: list[str], grants: list[bool]) -> None:
        """Deliver dialog outcomes to the attached receiver.

        Rationale hints are read through query_show_rationale() right after
        the dialog, while they are still valid.

        Args:
            request_code: Correlation token given to prompt_async
            identifiers: Prompted identifiers, in prompt order
            grants: Grant outcome per identifier
        """
        result = PromptResult(
            request_code=request_code,
            identifiers=list(identifiers),
            grants=list(grants),
            rationales=[self.query_show_rationale(identifier) for identifier in identifiers],
        )

        if self.receiver is None:
            logger.warning(
                f"[{type(self).__name__}] Dropping prompt result for {result.identifiers}: "
                "no coordination unit attached"
            )
            return

        self.receiver.on_prompt_result(result)
