"""Qt adapter for RootPresenterPort.

Service callbacks arrive on the asyncio runtime thread. Each one is
re-emitted as a Qt signal whose receiver lives on the main thread, so Qt
queues the call there; widgets are never touched from the loop thread.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt5.QtCore import QObject, pyqtSignal

from langchat.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from langchat.app.services.offline_banner import BannerState
    from langchat.boot.app_factory import AppComponents
    from langchat.domain.bootstrap import BootstrapDecision
    from langchat.domain.retry import RetryState
    from langchat.ui.widgets.root_window import RootWindow

logger = get_cached_logger(__name__)


class QtRootPresenter(QObject):
    """Marshals bootstrap output onto the Qt main thread."""

    decision_received = pyqtSignal(object)
    countdown_received = pyqtSignal(int)
    retry_state_received = pyqtSignal(object)
    probe_failed_received = pyqtSignal(int, float)
    banner_state_received = pyqtSignal(object)

    def __init__(self, window: RootWindow, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._window = window
        self._components: AppComponents | None = None

        self.decision_received.connect(window.show_decision)
        self.countdown_received.connect(window.offline_view.set_countdown)
        self.retry_state_received.connect(window.offline_view.set_retry_state)
        self.probe_failed_received.connect(window.offline_view.show_probe_failed)
        self.banner_state_received.connect(window.set_banner_state)

    def present(self, decision: BootstrapDecision) -> None:
        """RootPresenterPort entry point; safe from any thread."""
        self.decision_received.emit(decision)

    def bind(self, components: AppComponents) -> None:
        """Forward scheduler and banner signals to the window."""
        self.unbind()
        self._components = components
        components.scheduler.countdown_changed.connect(self._forward_countdown)
        components.scheduler.state_changed.connect(self._forward_retry_state)
        components.scheduler.probe_failed.connect(self._forward_probe_failed)
        components.banner.state_changed.connect(self._forward_banner_state)
        logger.debug("[QtRootPresenter] Bound to components", extra={"dev_only": True})

    def unbind(self) -> None:
        components = self._components
        if components is None:
            return
        components.scheduler.countdown_changed.disconnect(self._forward_countdown)
        components.scheduler.state_changed.disconnect(self._forward_retry_state)
        components.scheduler.probe_failed.disconnect(self._forward_probe_failed)
        components.banner.state_changed.disconnect(self._forward_banner_state)
        self._components = None

    def _forward_countdown(self, seconds: int) -> None:
        self.countdown_received.emit(seconds)

    def _forward_retry_state(self, state: RetryState) -> None:
        self.retry_state_received.emit(state)

    def _forward_probe_failed(self, attempt: int, next_interval: float) -> None:
        self.probe_failed_received.emit(attempt, next_interval)

    def _forward_banner_state(self, state: BannerState) -> None:
        self.banner_state_received.emit(state)
