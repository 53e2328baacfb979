"""Host adapter that asks the user through MCP elicitation dialogs."""

import asyncio
import logging
from typing import Any

from ..config import Settings
from .adapter import HostSurfaceAdapter

logger = logging.getLogger(__name__)


class ElicitationHost(HostSurfaceAdapter):
    """Permission host backed by an MCP client's elicitation UI.

    Grant state is kept in memory for the lifetime of the host. Each pending
    permission is shown as one yes/no dialog via ctx.elicit(). Outcomes map to
    grant state as follows:

    - accept + yes: granted
    - accept + no: denied, may ask again (rationale shown)
    - decline: denied and blocked, later prompts are denied without a dialog
    - cancel: denied, may ask again

    Attributes:
        ctx: MCP Context for calling elicit(), or None if unavailable
        settings: Application settings
        granted: Permissions granted so far
        blocked: Permissions the user declined permanently
    """

    def __init__(self, ctx: Any, settings: Settings | None = None) -> None:
        """Initialize host.

        Args:
            ctx: MCP Context for elicitation. None disables runtime prompting.
            settings: Application settings
        """
        super().__init__()
        self.ctx = ctx
        self.settings = settings or Settings()
        self.granted: set[str] = set()
        self.blocked: set[str] = set()
        self._denied: set[str] = set()
        self._tasks: set[asyncio.Task] = set()

    def query_granted(self, identifier: str) -> bool:
        return identifier in self.granted

    def query_show_rationale(self, identifier: str) -> bool:
        return identifier in self._denied and identifier not in self.blocked

    def query_target_capability_level(self) -> int | None:
        return self.settings.declared_target_level

    def is_runtime_prompting_supported(self) -> bool:
        return self.ctx is not None

    def prompt_async(self, identifiers: list[str], request_code: int) -> None:
        """Schedule the dialogs on the running event loop.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        # The batch keeps the context it started with, even if ctx is refreshed
        task = loop.create_task(self._run_dialogs(list(identifiers), request_code, self.ctx))
        self._tasks.add(task)
        task.add_done_callback(self._on_dialogs_done)

    def _on_dialogs_done(self, task: asyncio.Task) -> None:
        """Forget a finished dialog task and log its failure, if any."""
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("[ElicitationHost] Permission dialogs were cancelled")
            return

        error = task.exception()
        if error is not None:
            logger.error(f"[ElicitationHost] Error delivering permission result: {error}", exc_info=error)

    async def _run_dialogs(self, identifiers: list[str], request_code: int, ctx: Any) -> None:
        """Show one dialog per permission, then emit the combined result."""
        grants = []
        for identifier in identifiers:
            grants.append(await self._ask(ctx, identifier))

        self.emit_result(request_code, identifiers, grants)

    async def _ask(self, ctx: Any, identifier: str) -> bool:
        """Ask the user about a single permission.

        Args:
            ctx: MCP Context of the request that started the batch
            identifier: Permission to ask about

        Returns:
            True if the user granted it
        """
        if identifier in self.blocked:
            logger.info(f"[ElicitationHost] {identifier} is blocked, denying without dialog")
            return False

        message = f"Allow {identifier}?"
        logger.info(f"[ElicitationHost] 🔔 SHOWING PERMISSION DIALOG: {message}")

        try:
            result = await ctx.elicit(message, response_type=bool)
        except Exception as e:
            # Treat as cancelled so the batch still gets its single result
            logger.error(f"[ElicitationHost] Elicitation failed for {identifier}: {e}")
            self._denied.add(identifier)
            return False

        logger.info(f"[ElicitationHost] User responded: action={result.action}, data={result.data}")

        if result.action == "accept" and result.data:
            self.granted.add(identifier)
            self._denied.discard(identifier)
            return True

        self._denied.add(identifier)
        if result.action == "decline":
            self.blocked.add(identifier)
        return False
