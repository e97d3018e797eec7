"""Network ports for ConnectivityMonitor.

Two sources of truth: the passive OS-level network path and an active
application-level round trip to the backend.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from langchat.domain.connectivity import ConnectionType

PathCallback = Callable[[bool, ConnectionType], None]


@runtime_checkable
class NetworkPathPort(Protocol):
    """Passive network path observation.

    start() may invoke the callback from any thread, once per observed
    change plus once with the initial reading.
    """

    def start(self, callback: PathCallback) -> None:
        ...

    def stop(self) -> None:
        ...


@runtime_checkable
class BackendProbePort(Protocol):
    """Lightweight request against the backend."""

    async def ping(self) -> bool:
        """Return True when the backend answered at application level.

        May raise on transport errors; callers classify.
        """
        ...
