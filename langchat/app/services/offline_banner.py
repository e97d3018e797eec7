"""Module: offline_banner.py

OfflineBannerModel - state behind the small in-app connectivity indicator.

    hidden --(disconnected)--> offline --(connected)--> back_online --(2s)--> hidden

"Back online" is only shown when the app was offline before; a
connected event without a prior outage keeps the banner hidden.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from langchat.config import BANNER_AUTO_HIDE_SECONDS
from langchat.domain.connectivity import ConnectivityState
from langchat.utils.events import Observable, Signal
from langchat.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from langchat.app.services.connectivity_monitor import ConnectivityMonitor

logger = get_cached_logger(__name__)

CallLater = Callable[[float, Callable[[], None]], Any]


class BannerState(Enum):
    HIDDEN = "hidden"
    OFFLINE = "offline"
    BACK_ONLINE = "back_online"


class OfflineBannerModel(Observable):
    """Connectivity banner state driven by ConnectivityMonitor events."""

    state_changed = Signal(BannerState)

    def __init__(
        self,
        *,
        auto_hide_seconds: float = BANNER_AUTO_HIDE_SECONDS,
        call_later: CallLater | None = None,
    ) -> None:
        """Initialize the model.

        Args:
            auto_hide_seconds: How long "back online" stays visible
            call_later: Scheduler returning a handle with cancel();
                defaults to the running event loop's call_later

        """
        super().__init__()
        self._auto_hide_seconds = auto_hide_seconds
        self._call_later = call_later
        self._state = BannerState.HIDDEN
        self._was_offline = False
        self._hide_handle: Any = None
        self._monitor: ConnectivityMonitor | None = None

    @property
    def state(self) -> BannerState:
        return self._state

    @property
    def is_visible(self) -> bool:
        return self._state is not BannerState.HIDDEN

    def attach(self, monitor: ConnectivityMonitor) -> None:
        """Follow a monitor's events, reflecting its current state at once."""
        self.detach()
        self._monitor = monitor
        monitor.connectivity_changed.connect(self.on_connectivity_changed)
        if monitor.state is ConnectivityState.DISCONNECTED:
            self.on_connectivity_changed(ConnectivityState.DISCONNECTED)

    def detach(self) -> None:
        if self._monitor is not None:
            self._monitor.connectivity_changed.disconnect(self.on_connectivity_changed)
            self._monitor = None
        self._cancel_auto_hide()

    def on_connectivity_changed(self, state: ConnectivityState) -> None:
        if state is ConnectivityState.DISCONNECTED:
            self._cancel_auto_hide()
            self._was_offline = True
            self._set_state(BannerState.OFFLINE)
        elif state is ConnectivityState.CONNECTED:
            if not self._was_offline:
                self._set_state(BannerState.HIDDEN)
                return
            self._set_state(BannerState.BACK_ONLINE)
            self._schedule_auto_hide()

    def _schedule_auto_hide(self) -> None:
        self._cancel_auto_hide()
        call_later = self._call_later or asyncio.get_running_loop().call_later
        self._hide_handle = call_later(self._auto_hide_seconds, self._auto_hide)

    def _cancel_auto_hide(self) -> None:
        if self._hide_handle is not None:
            self._hide_handle.cancel()
            self._hide_handle = None

    def _auto_hide(self) -> None:
        self._hide_handle = None
        self._was_offline = False
        self._set_state(BannerState.HIDDEN)

    def _set_state(self, state: BannerState) -> None:
        if state is self._state:
            return
        self._state = state
        logger.debug("[OfflineBanner] %s", state.value, extra={"dev_only": True})
        self.state_changed.emit(state)
