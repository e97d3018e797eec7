"""Module: connectivity.py.

Domain types for network reachability.
"""

from __future__ import annotations

from enum import Enum


class ConnectivityState(Enum):
    """Best-effort view of the network path.

    UNKNOWN only before the first concrete signal from the path source.
    """

    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"

    @classmethod
    def from_path(cls, is_satisfied: bool) -> ConnectivityState:
        return cls.CONNECTED if is_satisfied else cls.DISCONNECTED


class ConnectionType(Enum):
    """Kind of link carrying the current network path."""

    WIFI = "wifi"
    CELLULAR = "cellular"
    WIRED_ETHERNET = "wired_ethernet"
    UNKNOWN = "unknown"
