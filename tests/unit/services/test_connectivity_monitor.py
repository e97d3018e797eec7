"""Tests for ConnectivityMonitor."""

from __future__ import annotations

import asyncio

import pytest

from langchat.app.services.connectivity_monitor import ConnectivityMonitor
from langchat.domain.connectivity import ConnectionType, ConnectivityState
from tests.mocks import FakePathSource, FakeProbe


@pytest.fixture
def monitor(path_source: FakePathSource, probe: FakeProbe) -> ConnectivityMonitor:
    return ConnectivityMonitor(path_source, probe, probe_timeout=0.05)


class TestConnectivityMonitorPath:
    """Passive path observation."""

    def test_initial_state_is_unknown(self, monitor: ConnectivityMonitor) -> None:
        """Test nothing is known before the first path reading."""
        assert monitor.state is ConnectivityState.UNKNOWN
        assert monitor.connection_type is ConnectionType.UNKNOWN
        assert monitor.is_monitoring is False

    def test_transitions_reach_every_subscriber(
        self, monitor: ConnectivityMonitor, path_source: FakePathSource
    ) -> None:
        """Test each subscriber receives each transition once."""
        first: list[ConnectivityState] = []
        second: list[ConnectivityState] = []
        monitor.connectivity_changed.connect(first.append)
        monitor.connectivity_changed.connect(second.append)

        monitor.start_monitoring()
        path_source.push(True)
        path_source.push(True)
        path_source.push(False)
        path_source.push(True, ConnectionType.CELLULAR)

        expected = [
            ConnectivityState.CONNECTED,
            ConnectivityState.DISCONNECTED,
            ConnectivityState.CONNECTED,
        ]
        assert first == expected
        assert second == expected
        assert monitor.state is ConnectivityState.CONNECTED
        assert monitor.connection_type is ConnectionType.CELLULAR

    def test_state_never_regresses_to_unknown(
        self, monitor: ConnectivityMonitor, path_source: FakePathSource
    ) -> None:
        """Test once known, the state only flips between the concrete values."""
        seen: list[ConnectivityState] = []
        monitor.connectivity_changed.connect(seen.append)
        monitor.start_monitoring()

        for satisfied in (False, True, False, True):
            path_source.push(satisfied)
            assert monitor.state is not ConnectivityState.UNKNOWN

        assert ConnectivityState.UNKNOWN not in seen

    def test_connection_type_changes_are_published(
        self, monitor: ConnectivityMonitor, path_source: FakePathSource
    ) -> None:
        """Test link type changes are emitted separately from state changes."""
        types: list[ConnectionType] = []
        monitor.connection_type_changed.connect(types.append)
        monitor.start_monitoring()

        path_source.push(True, ConnectionType.WIFI)
        path_source.push(True, ConnectionType.WIRED_ETHERNET)

        assert types == [ConnectionType.WIFI, ConnectionType.WIRED_ETHERNET]

    def test_start_monitoring_is_idempotent(
        self, monitor: ConnectivityMonitor, path_source: FakePathSource
    ) -> None:
        """Test a second start does not restart the path source."""
        monitor.start_monitoring()
        monitor.start_monitoring()

        assert path_source.start_calls == 1
        assert monitor.is_monitoring is True

    def test_path_facility_failure_degrades_to_unknown(self, probe: FakeProbe) -> None:
        """Test an unavailable OS facility does not crash the monitor."""
        source = FakePathSource(fail_on_start=True)
        monitor = ConnectivityMonitor(source, probe)

        monitor.start_monitoring()

        assert monitor.state is ConnectivityState.UNKNOWN
        assert monitor.is_monitoring is False

    def test_dispatcher_receives_updates(self, probe: FakeProbe) -> None:
        """Test foreign-thread updates are handed to the dispatcher."""
        queued = []
        source = FakePathSource()
        monitor = ConnectivityMonitor(source, probe, dispatch=queued.append)
        monitor.start_monitoring()

        source.push(False)
        assert monitor.state is ConnectivityState.UNKNOWN

        queued.pop()()
        assert monitor.state is ConnectivityState.DISCONNECTED

    def test_dispatch_after_shutdown_is_dropped(self, probe: FakeProbe) -> None:
        """Test a closed loop does not make the path thread raise."""

        def closed_loop_dispatch(_callback) -> None:
            raise RuntimeError("Event loop is closed")

        source = FakePathSource()
        monitor = ConnectivityMonitor(source, probe, dispatch=closed_loop_dispatch)
        monitor.start_monitoring()

        source.push(True)

        assert monitor.state is ConnectivityState.UNKNOWN

    def test_dispose_stops_source_and_subscribers(
        self, monitor: ConnectivityMonitor, path_source: FakePathSource
    ) -> None:
        """Test dispose() is safe to repeat and drops every subscriber."""
        seen: list[ConnectivityState] = []
        monitor.connectivity_changed.connect(seen.append)
        monitor.start_monitoring()

        monitor.dispose()
        monitor.dispose()

        assert path_source.stop_calls == 1
        assert monitor.connectivity_changed.receivers() == 0
        assert monitor.is_monitoring is False


class TestConnectivityMonitorReachability:
    """check_backend_reachable()."""

    def test_reachable_backend(self, monitor: ConnectivityMonitor, probe: FakeProbe) -> None:
        """Test a successful probe resolves True."""
        assert asyncio.run(monitor.check_backend_reachable()) is True
        assert probe.calls == 1

    def test_probe_answering_false(self, path_source: FakePathSource) -> None:
        """Test a negative probe answer resolves False."""
        monitor = ConnectivityMonitor(path_source, FakeProbe(False))
        assert asyncio.run(monitor.check_backend_reachable()) is False

    def test_probe_error_resolves_false(self, path_source: FakePathSource) -> None:
        """Test transport errors never escape."""
        monitor = ConnectivityMonitor(path_source, FakeProbe(ConnectionError("refused")))
        assert asyncio.run(monitor.check_backend_reachable()) is False

    def test_probe_timeout_resolves_false(self, path_source: FakePathSource) -> None:
        """Test a hanging probe is bounded by the timeout."""
        probe = FakeProbe(True)

        async def scenario() -> bool:
            probe.gate = asyncio.Event()
            monitor = ConnectivityMonitor(path_source, probe, probe_timeout=0.01)
            return await monitor.check_backend_reachable()

        assert asyncio.run(scenario()) is False

    def test_disconnected_path_skips_request(
        self, monitor: ConnectivityMonitor, path_source: FakePathSource, probe: FakeProbe
    ) -> None:
        """Test no request is made while the path is down."""
        monitor.start_monitoring()
        path_source.push(False)

        assert asyncio.run(monitor.check_backend_reachable()) is False
        assert probe.calls == 0
