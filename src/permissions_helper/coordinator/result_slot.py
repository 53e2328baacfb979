"""Consume-once result delivery."""

import logging
from typing import Callable, Sequence

from ..exceptions import ResultAlreadyDeliveredError
from ..models.permission import Permission

logger = logging.getLogger(__name__)

PermissionsListener = Callable[[list[Permission]], None]
"""Callback receiving the consolidated permission records of one request."""


class ResultSlot:
    """Holds the listener of one request and hands it a result exactly once.

    Attributes:
        listener: Callback to invoke with the records
    """

    def __init__(self, listener: PermissionsListener) -> None:
        self.listener = listener
        self._delivered = False

    @property
    def delivered(self) -> bool:
        """True once deliver() has been called."""
        return self._delivered

    def deliver(self, records: Sequence[Permission]) -> None:
        """Invoke the listener with the records.

        The slot is consumed before the listener runs, so a listener that
        raises still counts as delivered.

        Args:
            records: Consolidated permission records

        Raises:
            ResultAlreadyDeliveredError: If the slot was already consumed
        """
        if self._delivered:
            raise ResultAlreadyDeliveredError("Permission result was already delivered")
        self._delivered = True

        logger.debug(f"[ResultSlot] Delivering {len(records)} permission record(s)")
        self.listener(list(records))
