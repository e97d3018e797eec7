"""Module: interface_watcher.py

InterfacePathWatcher - passive network path observation via psutil.

Polls the interface table on a daemon thread and reports whether any
non-loopback, non-virtual interface is up, together with a best guess of
the link type from the interface name.
"""

from __future__ import annotations

import threading

import psutil

from langchat.app.ports.network import PathCallback
from langchat.config import PATH_POLL_INTERVAL
from langchat.domain.connectivity import ConnectionType
from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_LOOPBACK_PREFIXES = ("lo",)
_VIRTUAL_PREFIXES = (
    "docker",
    "veth",
    "br-",
    "virbr",
    "vmnet",
    "vboxnet",
    "utun",
    "awdl",
    "llw",
    "bridge",
    "tailscale",
)
_WIFI_PREFIXES = ("wl", "wlan", "wifi", "wi-fi", "airport")
_CELLULAR_PREFIXES = ("wwan", "ppp", "rmnet", "pdp_ip", "cellular", "mobile")
_ETHERNET_PREFIXES = ("eth", "en", "ethernet")

# Link type precedence when several interfaces are up
_TYPE_PRECEDENCE = (ConnectionType.WIFI, ConnectionType.CELLULAR, ConnectionType.WIRED_ETHERNET)


def classify_interface(name: str) -> ConnectionType | None:
    """Guess the link type of an interface name, None for loopback/virtual."""
    lowered = name.lower()
    if lowered.startswith(_LOOPBACK_PREFIXES) or "loopback" in lowered:
        return None
    if lowered.startswith(_VIRTUAL_PREFIXES):
        return None
    if lowered.startswith(_WIFI_PREFIXES) or "wireless" in lowered:
        return ConnectionType.WIFI
    if lowered.startswith(_CELLULAR_PREFIXES):
        return ConnectionType.CELLULAR
    if lowered.startswith(_ETHERNET_PREFIXES):
        return ConnectionType.WIRED_ETHERNET
    return ConnectionType.UNKNOWN


def read_network_path() -> tuple[bool, ConnectionType]:
    """Read the current path from the interface table.

    Returns:
        (is_satisfied, connection_type)

    """
    kinds: set[ConnectionType] = set()
    for name, stats in psutil.net_if_stats().items():
        if not stats.isup:
            continue
        kind = classify_interface(name)
        if kind is not None:
            kinds.add(kind)

    if not kinds:
        return False, ConnectionType.UNKNOWN

    for kind in _TYPE_PRECEDENCE:
        if kind in kinds:
            return True, kind
    return True, ConnectionType.UNKNOWN


class InterfacePathWatcher:
    """Polling NetworkPathPort implementation.

    The callback runs on the watcher thread: once with the initial
    reading, then on every change.
    """

    def __init__(self, poll_interval: float = PATH_POLL_INTERVAL) -> None:
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._callback: PathCallback | None = None
        self._last: tuple[bool, ConnectionType] | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, callback: PathCallback) -> None:
        """Take an initial reading and start polling.

        Raises whatever psutil raises for the initial reading, so the
        caller can degrade to an unknown state.
        """
        if self.is_running:
            return

        initial = read_network_path()
        self._callback = callback
        self._last = initial
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop, name="langchat-network-path", daemon=True
        )
        self._thread.start()

        logger.info(
            "[InterfacePathWatcher] Started (initial: %s, %s, polling every %.1fs)",
            "connected" if initial[0] else "disconnected",
            initial[1].value,
            self._poll_interval,
        )
        callback(*initial)

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=self._poll_interval + 1.0)
        self._thread = None
        self._callback = None
        logger.info("[InterfacePathWatcher] Stopped")

    def _poll_loop(self) -> None:
        while not self._stop_event.wait(self._poll_interval):
            try:
                current = read_network_path()
            except Exception as e:
                logger.warning("[InterfacePathWatcher] Failed to read interfaces: %s", e)
                continue

            if current == self._last:
                continue
            self._last = current

            callback = self._callback
            if callback is None or self._stop_event.is_set():
                return
            try:
                callback(*current)
            except Exception:
                logger.exception("[InterfacePathWatcher] Path callback failed")
