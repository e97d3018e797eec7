"""Module: offline_view.py

OfflineView - shown while the backend cannot be reached.

Displays the retry countdown surfaced by RetryScheduler and a manual
retry button. The view never schedules anything itself; it only renders
what it is told and emits retry_requested.
"""

from PyQt5.QtCore import Qt, QTimer, pyqtSignal, pyqtSlot
from PyQt5.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from langchat.config import (
    ACCENT_COLOR,
    OFFLINE_BACKGROUND,
    OFFLINE_CHECKING,
    OFFLINE_MESSAGE,
    OFFLINE_NEXT_RETRY,
    OFFLINE_RETRY_BUTTON,
    OFFLINE_RETRYING,
    OFFLINE_STILL_OFFLINE,
    OFFLINE_TITLE,
    PRIMARY_TEXT,
    SECONDARY_TEXT,
)
from langchat.domain.retry import RetryState
from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class OfflineView(QWidget):
    """Offline screen with countdown and manual retry."""

    retry_requested = pyqtSignal()

    DOTS_INTERVAL_MS = 500

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("offlineView")
        self.setStyleSheet(f"#offlineView {{ background-color: {OFFLINE_BACKGROUND}; }}")

        self.title_label = QLabel(OFFLINE_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(f"color: {PRIMARY_TEXT}; font-size: 28px; font-weight: bold;")

        self.message_label = QLabel(OFFLINE_MESSAGE, self)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        self.message_label.setStyleSheet(f"color: {SECONDARY_TEXT}; font-size: 16px;")

        self.retrying_label = QLabel(OFFLINE_RETRYING, self)
        self.retrying_label.setAlignment(Qt.AlignCenter)
        self.retrying_label.setStyleSheet(f"color: {ACCENT_COLOR}; font-size: 15px;")

        self.countdown_label = QLabel("", self)
        self.countdown_label.setAlignment(Qt.AlignCenter)
        self.countdown_label.setStyleSheet(f"color: {SECONDARY_TEXT}; font-size: 13px;")

        self.retry_button = QPushButton(OFFLINE_RETRY_BUTTON, self)
        self.retry_button.setFixedSize(140, 48)
        self.retry_button.setStyleSheet(
            f"background-color: {ACCENT_COLOR}; color: {PRIMARY_TEXT}; "
            "border-radius: 12px; font-size: 17px; font-weight: 600;"
        )
        self.retry_button.clicked.connect(self._on_retry_clicked)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(40, 0, 40, 0)
        layout.addStretch(1)
        layout.addWidget(self.title_label)
        layout.addSpacing(12)
        layout.addWidget(self.message_label)
        layout.addSpacing(32)
        layout.addWidget(self.retrying_label)
        layout.addSpacing(8)
        layout.addWidget(self.countdown_label)
        layout.addSpacing(24)
        layout.addWidget(self.retry_button, alignment=Qt.AlignHCenter)
        layout.addStretch(1)

        self._dot_count = 0
        self._dots_timer = QTimer(self)
        self._dots_timer.setInterval(self.DOTS_INTERVAL_MS)
        self._dots_timer.timeout.connect(self._animate_dots)

    @pyqtSlot(int)
    def set_countdown(self, seconds: int) -> None:
        if seconds > 0:
            self.countdown_label.setText(OFFLINE_NEXT_RETRY.format(seconds=seconds))
        else:
            self.countdown_label.setText(OFFLINE_CHECKING)

    @pyqtSlot(object)
    def set_retry_state(self, state: RetryState) -> None:
        probing = state is RetryState.PROBING
        self.retry_button.setEnabled(not probing)
        if probing:
            self.retrying_label.setText(OFFLINE_RETRYING)
            self.countdown_label.setText(OFFLINE_CHECKING)

    @pyqtSlot(int, float)
    def show_probe_failed(self, _attempt: int, _next_interval: float) -> None:
        self.retrying_label.setText(OFFLINE_STILL_OFFLINE)

    def showEvent(self, event):
        super().showEvent(event)
        self._dots_timer.start()

    def hideEvent(self, event):
        self._dots_timer.stop()
        super().hideEvent(event)

    def _on_retry_clicked(self) -> None:
        logger.info("[OfflineView] Manual retry clicked")
        self.retry_button.setEnabled(False)
        self.retry_requested.emit()

    def _animate_dots(self) -> None:
        if not self.retrying_label.text().startswith(OFFLINE_RETRYING):
            return
        self._dot_count = (self._dot_count + 1) % 4
        self.retrying_label.setText(OFFLINE_RETRYING + "." * self._dot_count)
