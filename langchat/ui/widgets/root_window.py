"""Module: root_window.py

RootWindow - hosts exactly one root screen per BootstrapDecision.

Switching roots replaces the visible page of a QStackedWidget; screens
are never stacked on top of each other. The main app, onboarding and
authentication flows are placeholders here.
"""

from PyQt5.QtCore import Qt, pyqtSignal, pyqtSlot
from PyQt5.QtWidgets import QLabel, QMainWindow, QStackedWidget, QVBoxLayout, QWidget

from langchat.app.services.offline_banner import BannerState
from langchat.config import (
    LOADING_TEXT,
    PRIMARY_TEXT,
    ROOT_BACKGROUND,
    ROOT_PLACEHOLDER_TEXTS,
    WINDOW_MIN_SIZE,
    WINDOW_TITLE,
)
from langchat.domain.bootstrap import BootstrapDecision
from langchat.ui.widgets.offline_banner import OfflineBannerWidget
from langchat.ui.widgets.offline_view import OfflineView
from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def _placeholder(text: str, parent: QWidget) -> QLabel:
    label = QLabel(text, parent)
    label.setAlignment(Qt.AlignCenter)
    label.setStyleSheet(f"color: {PRIMARY_TEXT}; font-size: 20px;")
    return label


class RootWindow(QMainWindow):
    """Main window whose central page follows the bootstrap decision."""

    retry_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(*WINDOW_MIN_SIZE)

        central = QWidget(self)
        central.setStyleSheet(f"background-color: {ROOT_BACKGROUND};")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.banner = OfflineBannerWidget(central)
        self.stack = QStackedWidget(central)
        layout.addWidget(self.banner)
        layout.addWidget(self.stack, 1)
        self.setCentralWidget(central)

        self.offline_view = OfflineView(self.stack)
        self.offline_view.retry_requested.connect(self.retry_requested)

        self._pages: dict[BootstrapDecision, QWidget] = {
            BootstrapDecision.LOADING: _placeholder(LOADING_TEXT, self.stack),
            BootstrapDecision.OFFLINE: self.offline_view,
        }
        for decision in (
            BootstrapDecision.MAIN_APP,
            BootstrapDecision.ONBOARDING,
            BootstrapDecision.AUTHENTICATION,
        ):
            self._pages[decision] = _placeholder(ROOT_PLACEHOLDER_TEXTS[decision.value], self.stack)

        for page in self._pages.values():
            self.stack.addWidget(page)

        self._banner_model_state = BannerState.HIDDEN
        self._decision = BootstrapDecision.LOADING
        self.stack.setCurrentWidget(self._pages[self._decision])

    @property
    def current_decision(self) -> BootstrapDecision:
        return self._decision

    def page_for(self, decision: BootstrapDecision) -> QWidget:
        return self._pages[decision]

    @pyqtSlot(object)
    def show_decision(self, decision: BootstrapDecision) -> None:
        if decision is self._decision:
            return
        logger.info("[RootWindow] Root screen -> %s", decision.value)
        self._decision = decision
        self.stack.setCurrentWidget(self._pages[decision])
        self._apply_banner_state()

    @pyqtSlot(object)
    def set_banner_state(self, state: BannerState) -> None:
        self._banner_model_state = state
        self._apply_banner_state()

    def _apply_banner_state(self) -> None:
        state = self._banner_model_state
        # The offline screen already says so
        if self._decision is BootstrapDecision.OFFLINE and state is BannerState.OFFLINE:
            state = BannerState.HIDDEN
        self.banner.set_banner_state(state)
