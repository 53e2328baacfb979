"""FastMCP server exposing permission requests as a tool."""

import logging
from collections import OrderedDict
from typing import Annotated, Any

from fastmcp import FastMCP, Context
from pydantic import Field

from .config import Settings
from .helper import PermissionsHelper
from .host.elicitation import ElicitationHost

settings = Settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

mcp = FastMCP("permissions-helper")
helper = PermissionsHelper(settings=settings)

# One host per MCP session so grant state follows the client, least recently used first
_hosts: OrderedDict[str, ElicitationHost] = OrderedDict()


def _host_for(ctx: Context | None) -> ElicitationHost:
    """Get or create the elicitation host for the caller's session."""
    session_id = getattr(ctx, "session_id", None) or "default"
    host = _hosts.get(session_id)
    if host is None:
        host = ElicitationHost(ctx, settings=settings)
        _hosts[session_id] = host
        logger.info(f"Created permission host for session {session_id}")
        _evict_idle_hosts()
    else:
        _hosts.move_to_end(session_id)
        if not helper.in_flight(host):
            host.ctx = ctx
    return host


def _evict_idle_hosts() -> None:
    """Drop least recently used hosts beyond the configured limit.

    Hosts with a request in flight are kept until their dialogs finish, and
    the most recently used host is always kept.
    """
    excess = len(_hosts) - settings.max_session_hosts
    for session_id in list(_hosts)[:-1]:
        if excess <= 0:
            break
        if helper.in_flight(_hosts[session_id]):
            continue
        del _hosts[session_id]
        excess -= 1
        logger.info(f"Evicted permission host for session {session_id}")


@mcp.tool(
    annotations={
        "title": "Request Permissions",
        "readOnlyHint": False,
        "destructiveHint": False,
        "openWorldHint": False,
    }
)
async def request_permissions(
    permissions: Annotated[list[str], Field(description="Permission names to request, e.g. CAMERA")],
    enforce_once_per_session: Annotated[bool, Field(
        default=False,
        description="Do not ask again for permissions already requested this session"
    )] = False,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Ask the user for permissions.
    Already granted permissions are not asked again.
    """
    host = _host_for(ctx)
    records = await helper.request_permissions_async(host, permissions, enforce_once_per_session)

    return {
        "permissions": [record.to_dict() for record in records],
        "granted": [record.identifier for record in records if record.granted],
        "denied": [record.identifier for record in records if not record.granted],
    }


def main() -> None:
    """Main entry point for MCP server."""
    logger.info("Starting permissions helper server...")
    logger.info(f"Settings: request_code={settings.request_code}, "
                f"runtime_prompting_level={settings.runtime_prompting_level}")

    mcp.run(show_banner=False)


if __name__ == "__main__":
    main()
