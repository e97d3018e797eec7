"""UI root presenter port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from langchat.domain.bootstrap import BootstrapDecision


@runtime_checkable
class RootPresenterPort(Protocol):
    """Swaps the visible root screen.

    May be called from the bootstrap loop's thread; UI implementations
    marshal onto their own thread.
    """

    def present(self, decision: BootstrapDecision) -> None:
        ...
