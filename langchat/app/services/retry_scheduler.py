"""Module: retry_scheduler.py

RetryScheduler - exponential-backoff probing while the backend is unreachable.

State machine:
    idle -> scheduled -> probing -> (success: idle / failure: scheduled)
    scheduled -> probing on retry_now(), bypassing the wait

The countdown is computed against absolute deadlines chained from one
wait to the next, so timer lateness does not accumulate: probe k starts
at t0 plus the sum of the first k intervals (plus time spent probing).

Each run carries its own cancellation token; a run whose token was
cancelled emits nothing further.
"""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Awaitable, Callable

from langchat.config import (
    RETRY_BACKOFF_MULTIPLIER,
    RETRY_INITIAL_INTERVAL,
    RETRY_MAX_INTERVAL,
)
from langchat.domain.retry import RetrySession, RetryState
from langchat.utils.events import Observable, Signal
from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

Probe = Callable[[], Awaitable[bool]]
Sleep = Callable[[float], Awaitable[None]]


class CancelToken:
    """One-shot cancellation flag shared between the scheduler and a run."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class RetryScheduler(Observable):
    """Drives repeated reachability probes until success or stop().

    All public methods must be called on the event loop's thread.

    Signals:
        state_changed: RetryState transitions
        countdown_changed: Whole seconds left before the next probe
        probe_started: 1-based attempt number
        probe_failed: attempt number, next interval in seconds
        restored: One-shot, emitted after a successful probe
    """

    state_changed = Signal(RetryState)
    countdown_changed = Signal(int)
    probe_started = Signal(int)
    probe_failed = Signal(int, float)
    restored = Signal()

    def __init__(
        self,
        probe: Probe,
        *,
        multiplier: float = RETRY_BACKOFF_MULTIPLIER,
        clock: Callable[[], float] = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the scheduler.

        Args:
            probe: Coroutine function returning True when the backend is back
            multiplier: Backoff growth factor
            clock: Monotonic clock in seconds
            sleep: Coroutine sleeping for the given number of seconds

        """
        super().__init__()
        self._probe = probe
        self._multiplier = multiplier
        self._clock = clock
        self._sleep = sleep

        self._state = RetryState.IDLE
        self._session: RetrySession | None = None
        self._task: asyncio.Task | None = None
        self._token: CancelToken | None = None

    @property
    def state(self) -> RetryState:
        return self._state

    @property
    def session(self) -> RetrySession | None:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._state is not RetryState.IDLE

    def start(
        self,
        initial_interval_seconds: float = RETRY_INITIAL_INTERVAL,
        max_interval_seconds: float = RETRY_MAX_INTERVAL,
    ) -> bool:
        """Begin the schedule with a fresh RetrySession.

        Returns:
            False if the scheduler was already running (nothing changes)

        """
        if self.is_running:
            logger.warning("[RetryScheduler] start() ignored, already running")
            return False

        self._session = RetrySession(
            initial_interval_seconds, max_interval_seconds, self._multiplier
        )
        logger.info(
            "[RetryScheduler] Started (initial=%.1fs, max=%.1fs)",
            initial_interval_seconds,
            max_interval_seconds,
        )
        self._launch(probe_first=False)
        return True

    def stop(self) -> None:
        """Cancel any pending wait or probe and go idle. No-op when idle."""
        if not self.is_running and self._task is None:
            return

        self._cancel_run()
        self._session = None
        self._set_state(RetryState.IDLE)
        logger.info("[RetryScheduler] Stopped")

    def reset(self) -> None:
        """Restore the initial interval and zero the attempt count."""
        if self._session is not None:
            self._session.reset()

    def retry_now(self) -> bool:
        """Manual retry: skip the remaining wait and probe immediately.

        Ignored while a probe is in flight or when not running.

        Returns:
            True if a probe was started

        """
        if self._state is RetryState.PROBING:
            logger.info("[RetryScheduler] Manual retry ignored, probe already in flight")
            return False
        if self._state is RetryState.IDLE:
            logger.debug(
                "[RetryScheduler] Manual retry ignored, not running", extra={"dev_only": True}
            )
            return False

        logger.info("[RetryScheduler] Manual retry requested")
        self._cancel_run()
        self.reset()
        self._launch(probe_first=True)
        return True

    async def join(self) -> None:
        """Wait until the scheduler is idle (success or stop())."""
        while self._task is not None:
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if self._task is task:
                break

    def _launch(self, probe_first: bool) -> None:
        token = CancelToken()
        self._token = token
        # Synchronous transition: a second retry_now() in the same tick sees PROBING
        self._set_state(RetryState.PROBING if probe_first else RetryState.SCHEDULED)
        self._task = asyncio.get_running_loop().create_task(self._run(token, probe_first))

    def _cancel_run(self) -> None:
        if self._token is not None:
            self._token.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._token = None

    def _set_state(self, state: RetryState) -> None:
        if state is self._state:
            return
        self._state = state
        logger.debug("[RetryScheduler] State -> %s", state.value, extra={"dev_only": True})
        self.state_changed.emit(state)

    async def _run(self, token: CancelToken, probe_first: bool) -> None:
        session = self._session
        if session is None:
            return

        # Deadlines chain from the previous one; only probe time shifts them
        anchor = self._clock()
        if not probe_first:
            deadline = await self._count_down(token, anchor, session.current_interval_seconds)
            if deadline is None:
                return
            anchor = deadline

        while not token.cancelled:
            self._set_state(RetryState.PROBING)
            probe_started_at = self._clock()
            attempt = session.record_attempt(probe_started_at)
            self.probe_started.emit(attempt)
            if token.cancelled:
                return

            reachable = await self._safe_probe(attempt)
            if token.cancelled:
                return

            if reachable:
                logger.info("[RetryScheduler] Probe %d succeeded, connectivity restored", attempt)
                session.reset()
                self._task = None
                self._token = None
                self._session = None
                self._set_state(RetryState.IDLE)
                self.restored.emit()
                return

            anchor += self._clock() - probe_started_at
            next_interval = session.advance()
            logger.info(
                "[RetryScheduler] Probe %d failed, next retry in %.2fs", attempt, next_interval
            )
            self.probe_failed.emit(attempt, next_interval)
            if token.cancelled:
                return

            self._set_state(RetryState.SCHEDULED)
            deadline = await self._count_down(token, anchor, next_interval)
            if deadline is None:
                return
            anchor = deadline

    async def _count_down(self, token: CancelToken, start: float, interval: float) -> float | None:
        """Emit whole seconds remaining until start + interval.

        Returns:
            The deadline that was reached, or None if the run was cancelled

        """
        deadline = start + interval
        remaining = math.ceil(interval)
        self.countdown_changed.emit(remaining)

        while remaining > 0:
            remaining -= 1
            delay = deadline - remaining - self._clock()
            if delay > 0:
                await self._sleep(delay)
            if token.cancelled:
                return None
            self.countdown_changed.emit(remaining)

        return None if token.cancelled else deadline

    async def _safe_probe(self, attempt: int) -> bool:
        try:
            return bool(await self._probe())
        except Exception as e:
            logger.warning("[RetryScheduler] Probe %d raised: %s", attempt, e)
            return False
