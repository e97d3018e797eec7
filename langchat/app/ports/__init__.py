"""Ports (Protocols) consumed by the application services."""

from langchat.app.ports.network import BackendProbePort, NetworkPathPort, PathCallback
from langchat.app.ports.presenter import RootPresenterPort
from langchat.app.ports.session import ProfileSyncPort, SessionServiceError, SessionServicePort

__all__ = [
    "BackendProbePort",
    "NetworkPathPort",
    "PathCallback",
    "ProfileSyncPort",
    "RootPresenterPort",
    "SessionServiceError",
    "SessionServicePort",
]
