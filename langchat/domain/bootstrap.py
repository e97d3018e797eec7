"""Module: bootstrap.py.

Domain types for the startup decision procedure.

The profile-completion answer is three-valued: a failed fetch is
INDETERMINATE and is never read as INCOMPLETE.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BootstrapDecision(Enum):
    """Root screen selected by the bootstrap sequence."""

    LOADING = "loading"
    OFFLINE = "offline"
    MAIN_APP = "mainApp"
    ONBOARDING = "onboarding"
    AUTHENTICATION = "authentication"


class ProfileCompletion(Enum):
    """Answer to "has this user finished onboarding?"."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    INDETERMINATE = "indeterminate"

    @classmethod
    def from_flag(cls, completed: bool) -> ProfileCompletion:
        return cls.COMPLETE if completed else cls.INCOMPLETE


@dataclass(frozen=True)
class SessionStatus:
    """Read-only snapshot of the auth/profile collaborator's answer."""

    authenticated: bool
    profile: ProfileCompletion = ProfileCompletion.INDETERMINATE

    def decide(self) -> BootstrapDecision:
        """Map the session snapshot to a root screen.

        >>> SessionStatus(False).decide()
        <BootstrapDecision.AUTHENTICATION: 'authentication'>
        >>> SessionStatus(True, ProfileCompletion.INDETERMINATE).decide()
        <BootstrapDecision.OFFLINE: 'offline'>
        """
        if not self.authenticated:
            return BootstrapDecision.AUTHENTICATION
        if self.profile is ProfileCompletion.COMPLETE:
            return BootstrapDecision.MAIN_APP
        if self.profile is ProfileCompletion.INCOMPLETE:
            return BootstrapDecision.ONBOARDING
        # Valid session but the server could not answer
        return BootstrapDecision.OFFLINE
