"""Request coordination: classification, batching and result delivery."""

from .classifier import Classification, Classifier
from .request_coordinator import RequestCoordinator
from .result_slot import PermissionsListener, ResultSlot

__all__ = [
    "Classification",
    "Classifier",
    "PermissionsListener",
    "RequestCoordinator",
    "ResultSlot",
]
