"""Pytest fixtures for unit tests.

Provides:
- FakeHost: scripted host surface that records every call
- host: fresh FakeHost with runtime prompting supported
- make_host: FakeHost factory for custom grant state
- tracker: empty SessionTracker
- coordinator: RequestCoordinator bound to host and tracker
- Listener: callable collecting delivered results
"""

import pytest

from permissions_helper.config import Settings
from permissions_helper.coordinator.request_coordinator import RequestCoordinator
from permissions_helper.host.adapter import HostSurfaceAdapter
from permissions_helper.storage.session_tracker import SessionTracker


class FakeHost(HostSurfaceAdapter):
    """Host surface with scripted grant state and manual dialog completion.

    Attributes:
        granted: Permissions reported as already granted
        rationale: Permissions whose show-rationale hint is True
        supported: Whether runtime prompting is supported
        target_level: Declared target level, or None for unknown
        lookup_error: Raise LookupError from the target level query
        prompts: Calls made to prompt_async as (identifiers, request_code)
        attach_count: Number of attach() calls
        detach_count: Number of detach() calls
    """

    def __init__(self, granted=(), rationale=(), supported=True, target_level=23):
        super().__init__()
        self.granted = set(granted)
        self.rationale = set(rationale)
        self.supported = supported
        self.target_level = target_level
        self.lookup_error = False
        self.prompts = []
        self.attach_count = 0
        self.detach_count = 0

    def query_granted(self, identifier):
        return identifier in self.granted

    def query_show_rationale(self, identifier):
        return identifier in self.rationale

    def query_target_capability_level(self):
        if self.lookup_error:
            raise LookupError("package not found")
        return self.target_level

    def is_runtime_prompting_supported(self):
        return self.supported

    def prompt_async(self, identifiers, request_code):
        self.prompts.append((list(identifiers), request_code))

    def attach(self, receiver):
        self.attach_count += 1
        super().attach(receiver)

    def detach(self, receiver):
        self.detach_count += 1
        super().detach(receiver)

    def answer(self, grants):
        """Complete the last dialog with the given grant outcomes."""
        identifiers, request_code = self.prompts[-1]
        for identifier, granted in zip(identifiers, grants):
            if granted:
                self.granted.add(identifier)
        self.emit_result(request_code, identifiers, grants)


class Listener:
    """Listener that records every delivery."""

    def __init__(self):
        self.calls = []

    def __call__(self, records):
        self.calls.append(records)

    @property
    def records(self):
        assert len(self.calls) == 1, f"expected one delivery, got {len(self.calls)}"
        return self.calls[0]


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def tracker() -> SessionTracker:
    return SessionTracker()


@pytest.fixture
def coordinator(host, tracker, settings) -> RequestCoordinator:
    return RequestCoordinator(host, tracker, settings)


@pytest.fixture
def listener() -> Listener:
    return Listener()


@pytest.fixture
def make_host():
    """Factory for FakeHost instances with custom grant state."""
    return FakeHost
