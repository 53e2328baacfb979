"""Permissions Helper - consolidated runtime permission requests.

This package mediates between application code that needs host-gated
permissions and the host's asynchronous grant/deny dialog. Each request
batch produces exactly one ordered list of Permission records:

- Already granted permissions are resolved without asking the host.
- Permissions requested once this session can be suppressed from re-prompting.
- Everything else is forwarded to the host dialog and merged on callback.

Example:
    >>> from permissions_helper import PermissionsHelper
    >>> helper = PermissionsHelper()
    >>> helper.request_permissions(host, ["CAMERA"], False, print)
"""

from .exceptions import (
    PermissionsHelperError,
    RequestInFlightError,
    ResultAlreadyDeliveredError,
)
from .helper import PermissionsHelper
from .models.permission import Permission, PromptResult

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "Permission",
    "PermissionsHelper",
    "PermissionsHelperError",
    "PromptResult",
    "RequestInFlightError",
    "ResultAlreadyDeliveredError",
]
