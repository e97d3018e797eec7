"""Domain layer - pure types for connectivity, bootstrap and retry.

No Qt, network or threading dependencies.
"""

from langchat.domain.bootstrap import BootstrapDecision, ProfileCompletion, SessionStatus
from langchat.domain.connectivity import ConnectionType, ConnectivityState
from langchat.domain.retry import RetrySession, RetryState, backoff_intervals

__all__ = [
    "BootstrapDecision",
    "ConnectionType",
    "ConnectivityState",
    "ProfileCompletion",
    "RetrySession",
    "RetryState",
    "SessionStatus",
    "backoff_intervals",
]
