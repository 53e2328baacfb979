"""Exception types raised by the permissions helper."""


class PermissionsHelperError(Exception):
    """Base class for all permissions helper errors."""


class RequestInFlightError(PermissionsHelperError, RuntimeError):
    """A request was issued while another batch is in flight on the same surface."""


class ResultAlreadyDeliveredError(PermissionsHelperError, RuntimeError):
    """A result slot was asked to deliver a second time."""
