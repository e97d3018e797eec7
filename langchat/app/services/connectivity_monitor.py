"""Module: connectivity_monitor.py

ConnectivityMonitor - best-effort view of network reachability.

Combines two sources:
- a passive network path source (OS level, pushed updates)
- an on-demand backend probe (application level round trip)

A device can have a working link while the backend is down, so the
bootstrap sequence always asks check_backend_reachable() rather than
trusting the passive state alone.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from langchat.config import REACHABILITY_TIMEOUT_SECONDS
from langchat.domain.connectivity import ConnectionType, ConnectivityState
from langchat.utils.events import Observable, Signal
from langchat.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from langchat.app.ports.network import BackendProbePort, NetworkPathPort

logger = get_cached_logger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


class ConnectivityMonitor(Observable):
    """Publishes connectivity transitions to any number of subscribers.

    Signals:
        connectivity_changed: Emitted on every state transition (ConnectivityState)
        connection_type_changed: Emitted when the link type changes (ConnectionType)
    """

    connectivity_changed = Signal(ConnectivityState)
    connection_type_changed = Signal(ConnectionType)

    def __init__(
        self,
        path_source: NetworkPathPort,
        probe: BackendProbePort,
        *,
        probe_timeout: float = REACHABILITY_TIMEOUT_SECONDS,
        dispatch: Dispatcher | None = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            path_source: Passive network path observer
            probe: Backend reachability probe
            probe_timeout: Upper bound for one probe, in seconds
            dispatch: Hands path updates to the owning context
                (e.g. loop.call_soon_threadsafe). None applies them inline.

        """
        super().__init__()
        self._path_source = path_source
        self._probe = probe
        self._probe_timeout = probe_timeout
        self._dispatch = dispatch

        self._lock = threading.Lock()
        self._state = ConnectivityState.UNKNOWN
        self._connection_type = ConnectionType.UNKNOWN
        self._monitoring = False

        logger.debug("[ConnectivityMonitor] Initialized", extra={"dev_only": True})

    @property
    def state(self) -> ConnectivityState:
        with self._lock:
            return self._state

    @property
    def connection_type(self) -> ConnectionType:
        with self._lock:
            return self._connection_type

    @property
    def is_monitoring(self) -> bool:
        return self._monitoring

    def start_monitoring(self) -> None:
        """Begin passive path observation. Safe to call repeatedly."""
        if self._monitoring:
            logger.debug("[ConnectivityMonitor] Already monitoring", extra={"dev_only": True})
            return

        try:
            self._path_source.start(self._on_path_update)
        except Exception:
            # State stays UNKNOWN; reachability is still decided by the probe
            logger.warning(
                "[ConnectivityMonitor] Network path monitoring unavailable", exc_info=True
            )
            return

        self._monitoring = True
        logger.info("[ConnectivityMonitor] Started monitoring")

    def stop_monitoring(self) -> None:
        """Stop passive observation. No-op when not monitoring."""
        if not self._monitoring:
            return
        self._monitoring = False

        try:
            self._path_source.stop()
        except Exception:
            logger.warning("[ConnectivityMonitor] Error stopping path source", exc_info=True)

        logger.info("[ConnectivityMonitor] Stopped monitoring")

    def dispose(self) -> None:
        """Stop monitoring and drop every subscriber."""
        self.stop_monitoring()
        self.disconnect_all()

    async def check_backend_reachable(self) -> bool:
        """Deep check against the backend.

        Resolves to False on timeout or any transport error; never raises
        anything but cancellation.
        """
        if self.state is ConnectivityState.DISCONNECTED:
            logger.info("[ConnectivityMonitor] Network path down, backend unreachable")
            return False

        try:
            reachable = await asyncio.wait_for(self._probe.ping(), timeout=self._probe_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "[ConnectivityMonitor] Backend probe timed out after %.1fs", self._probe_timeout
            )
            return False
        except Exception as e:
            logger.warning("[ConnectivityMonitor] Backend probe failed: %s", e)
            return False

        logger.info(
            "[ConnectivityMonitor] Backend %s", "reachable" if reachable else "unreachable"
        )
        return bool(reachable)

    def _on_path_update(self, is_satisfied: bool, connection_type: ConnectionType) -> None:
        """Path source callback; may run on a foreign thread."""
        if self._dispatch is None:
            self._apply_path_update(is_satisfied, connection_type)
            return

        try:
            self._dispatch(lambda: self._apply_path_update(is_satisfied, connection_type))
        except RuntimeError:
            # Owning loop already closed during teardown
            logger.debug(
                "[ConnectivityMonitor] Dropped path update after shutdown",
                extra={"dev_only": True},
            )

    def _apply_path_update(self, is_satisfied: bool, connection_type: ConnectionType) -> None:
        new_state = ConnectivityState.from_path(is_satisfied)

        with self._lock:
            previous_state = self._state
            previous_type = self._connection_type
            self._state = new_state
            self._connection_type = connection_type

        if connection_type is not previous_type:
            self.connection_type_changed.emit(connection_type)

        if new_state is not previous_state:
            logger.info(
                "[ConnectivityMonitor] Network status: %s -> %s (%s)",
                previous_state.value,
                new_state.value,
                connection_type.value,
            )
            self.connectivity_changed.emit(new_state)
