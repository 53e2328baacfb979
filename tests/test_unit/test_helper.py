"""Unit tests for PermissionsHelper."""

import gc
import weakref

import pytest

from permissions_helper.config import Settings
from permissions_helper.helper import PermissionsHelper
from permissions_helper.models.permission import Permission
from permissions_helper.storage.session_tracker import SessionTracker


class TestPermissionsHelper:
    """Test the caller-facing facade."""

    def test_reuses_coordinator_per_host(self, make_host):
        """The same host always maps to the same coordinator."""
        helper = PermissionsHelper()
        host = make_host()
        assert helper.coordinator_for(host) is helper.coordinator_for(host)
        assert helper.coordinator_for(host) is not helper.coordinator_for(make_host())

    def test_coordinators_share_tracker(self, make_host):
        """All coordinators use the helper's tracker."""
        tracker = SessionTracker()
        helper = PermissionsHelper(tracker=tracker)
        assert helper.coordinator_for(make_host()).tracker is tracker

    def test_request_permissions_scenario_without_prompting(self, make_host, listener):
        """Hosts without runtime prompting report everything granted."""
        helper = PermissionsHelper()
        host = make_host(supported=False)

        helper.request_permissions(host, ["CAMERA", "LOCATION"], False, listener)

        assert [p.to_dict() for p in listener.records] == [
            {"permission": "CAMERA", "granted": True, "show_rationale": False},
            {"permission": "LOCATION", "granted": True, "show_rationale": False},
        ]
        assert host.prompts == []

    def test_request_permissions_denied_scenario(self, make_host, listener):
        """A denied permission is reported with its rationale hint."""
        helper = PermissionsHelper()
        host = make_host(rationale={"CAMERA"})

        helper.request_permissions(host, ["CAMERA"], False, listener)
        host.answer([False])

        assert listener.records == [Permission("CAMERA", False, True)]

    def test_already_requested_in_session(self, host, listener):
        """Session membership is visible after a request completes."""
        helper = PermissionsHelper()
        assert not helper.already_requested_in_session("CAMERA")

        helper.request_permissions(host, ["CAMERA"], False, listener)
        host.answer([False])

        assert helper.already_requested_in_session("CAMERA")

    def test_default_enforcement_from_settings(self, host, listener):
        """None falls back to the configured once-per-session default."""
        helper = PermissionsHelper(settings=Settings(default_enforce_once_per_session=True))
        helper.request_permissions(host, ["CAMERA"], None, listener)
        host.answer([False])
        helper.request_permissions(host, ["CAMERA"], None, listener)

        assert len(host.prompts) == 1
        assert listener.calls[1] == [Permission("CAMERA", True, False)]

    def test_is_runtime_prompting_supported(self, make_host):
        """Support check is delegated to the host."""
        assert PermissionsHelper.is_runtime_prompting_supported(make_host())
        assert not PermissionsHelper.is_runtime_prompting_supported(make_host(supported=False))

    @pytest.mark.asyncio
    async def test_request_permissions_async(self, make_host):
        """The async variant returns the records."""
        helper = PermissionsHelper()
        host = make_host(granted={"CAMERA"})

        records = await helper.request_permissions_async(host, ["CAMERA"])

        assert records == [Permission("CAMERA", True, False)]

    def test_release_forgets_coordinator(self, make_host):
        """A released host gets a fresh coordinator next time."""
        helper = PermissionsHelper()
        host = make_host()
        first = helper.coordinator_for(host)

        helper.release(host)

        assert helper.coordinator_for(host) is not first

    def test_dropped_host_is_collected(self, make_host, listener):
        """The helper does not keep hosts or their coordinators alive."""
        helper = PermissionsHelper()
        host = make_host()
        helper.request_permissions(host, ["CAMERA"], False, listener)
        host.answer([True])
        host_ref = weakref.ref(host)

        del host
        gc.collect()

        assert host_ref() is None
        assert len(helper._coordinators) == 0

    def test_in_flight(self, host, listener):
        """in_flight reports a running request without creating a coordinator."""
        helper = PermissionsHelper()
        assert not helper.in_flight(host)
        assert len(helper._coordinators) == 0

        helper.request_permissions(host, ["CAMERA"], False, listener)
        assert helper.in_flight(host)

        host.answer([True])
        assert not helper.in_flight(host)
