"""Event system.

Pure Python signal implementation for decoupling observers from state
changes in the Qt-free layers (domain, app, infra).
"""

from langchat.utils.events.observable import Observable, Signal

__all__ = ["Observable", "Signal"]
