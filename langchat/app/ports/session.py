"""Session/auth and profile sync ports."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class SessionServiceError(Exception):
    """The session backend could not answer (transport or HTTP failure)."""


@runtime_checkable
class SessionServicePort(Protocol):
    def is_authenticated(self) -> bool:
        """Local check for a stored session, no network."""
        ...

    async def fetch_profile_completion(self) -> bool:
        """Ask the backend whether onboarding is finished.

        Raises on failure; a failure is not an answer.
        """
        ...


@runtime_checkable
class ProfileSyncPort(Protocol):
    async def sync_profile_locally(self) -> None:
        """Best-effort copy of the remote profile into local state."""
        ...
