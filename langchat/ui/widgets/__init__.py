"""Bootstrap screen widgets."""

from langchat.ui.widgets.offline_banner import OfflineBannerWidget
from langchat.ui.widgets.offline_view import OfflineView
from langchat.ui.widgets.root_window import RootWindow

__all__ = ["OfflineBannerWidget", "OfflineView", "RootWindow"]
