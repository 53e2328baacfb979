"""Host surface adapters.

The host owns the grant state and the interactive permission dialog:

- HostSurfaceAdapter: abstract boundary the coordinator talks to.
- ElicitationHost: adapter that asks the user through MCP elicitation.
"""

from .adapter import HostSurfaceAdapter, PromptResultReceiver
from .elicitation import ElicitationHost

__all__ = ["ElicitationHost", "HostSurfaceAdapter", "PromptResultReceiver"]
