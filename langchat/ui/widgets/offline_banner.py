"""Module: offline_banner.py

OfflineBannerWidget - thin connectivity strip at the top of the window.
Renders OfflineBannerModel states.
"""

from PyQt5.QtCore import Qt, pyqtSlot
from PyQt5.QtWidgets import QLabel, QWidget

from langchat.app.services.offline_banner import BannerState
from langchat.config import BANNER_OFFLINE_COLOR, BANNER_ONLINE_COLOR

_BANNER_TEXT = {
    BannerState.OFFLINE: ("No connection", BANNER_OFFLINE_COLOR),
    BannerState.BACK_ONLINE: ("Back online", BANNER_ONLINE_COLOR),
}


class OfflineBannerWidget(QLabel):
    HEIGHT = 32

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setFixedHeight(self.HEIGHT)
        self._state = BannerState.HIDDEN
        self.hide()

    @property
    def state(self) -> BannerState:
        return self._state

    @pyqtSlot(object)
    def set_banner_state(self, state: BannerState) -> None:
        self._state = state
        if state is BannerState.HIDDEN:
            self.hide()
            return

        text, color = _BANNER_TEXT[state]
        self.setText(text)
        self.setStyleSheet(f"color: {color}; font-weight: 600;")
        self.show()
