"""Module: retry.py.

Domain types for the offline retry schedule.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class RetryState(Enum):
    """RetryScheduler lifecycle."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    PROBING = "probing"


@dataclass
class RetrySession:
    """Backoff bookkeeping for one offline episode.

    Attributes:
        initial_interval_seconds: Interval restored by reset()
        max_interval_seconds: Upper bound for the interval
        multiplier: Geometric growth factor applied after each failed probe
        attempt_count: Probes performed since creation or the last reset()
        current_interval_seconds: Wait before the next probe
        last_attempt_at: Clock reading of the last probe, None before the first

    """

    initial_interval_seconds: float
    max_interval_seconds: float
    multiplier: float = 1.5
    attempt_count: int = 0
    current_interval_seconds: float = field(init=False)
    last_attempt_at: float | None = None

    def __post_init__(self) -> None:
        if self.initial_interval_seconds <= 0:
            raise ValueError("initial_interval_seconds must be positive")
        if self.max_interval_seconds < self.initial_interval_seconds:
            raise ValueError("max_interval_seconds must be >= initial_interval_seconds")
        if self.multiplier < 1.0:
            raise ValueError("multiplier must be >= 1.0")
        self.current_interval_seconds = self.initial_interval_seconds

    def record_attempt(self, now: float) -> int:
        """Count a probe and return its 1-based attempt number."""
        self.attempt_count += 1
        self.last_attempt_at = now
        return self.attempt_count

    def advance(self) -> float:
        """Grow the interval after a failed probe, clamped at the maximum."""
        self.current_interval_seconds = min(
            self.current_interval_seconds * self.multiplier, self.max_interval_seconds
        )
        return self.current_interval_seconds

    def reset(self) -> None:
        self.current_interval_seconds = self.initial_interval_seconds
        self.attempt_count = 0


def backoff_intervals(
    initial: float, maximum: float, multiplier: float = 1.5
) -> Iterator[float]:
    """Yield the successive wait intervals of a RetrySession that never succeeds.

    >>> from itertools import islice
    >>> list(islice(backoff_intervals(3.0, 30.0), 4))
    [3.0, 4.5, 6.75, 10.125]
    """
    session = RetrySession(initial, maximum, multiplier)
    while True:
        yield session.current_interval_seconds
        session.advance()
