"""Application services: connectivity, retry and bootstrap orchestration."""

from langchat.app.services.bootstrap_coordinator import BootstrapCoordinator
from langchat.app.services.connectivity_monitor import ConnectivityMonitor
from langchat.app.services.offline_banner import BannerState, OfflineBannerModel
from langchat.app.services.retry_scheduler import CancelToken, RetryScheduler

__all__ = [
    "BannerState",
    "BootstrapCoordinator",
    "CancelToken",
    "ConnectivityMonitor",
    "OfflineBannerModel",
    "RetryScheduler",
]
