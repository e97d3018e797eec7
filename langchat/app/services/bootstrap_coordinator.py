"""Module: bootstrap_coordinator.py

BootstrapCoordinator - sequences application startup into exactly one
visible root screen.

Sequence:
1. Present LOADING
2. Check backend reachability
3. Unreachable -> OFFLINE, start RetryScheduler; on restore go back to 2
4. Reachable -> session check
   - unauthenticated -> AUTHENTICATION
   - profile complete -> sync profile (best-effort) -> MAIN_APP
   - profile confirmed incomplete -> ONBOARDING
   - profile fetch failed -> OFFLINE (indeterminate, never ONBOARDING)

Nothing raised by a collaborator crosses this class's boundary; every
failure degrades to OFFLINE, from which the user can wait or retry.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from langchat.app.services.retry_scheduler import RetryScheduler
from langchat.config import (
    PROFILE_REQUEST_TIMEOUT_SECONDS,
    RETRY_INITIAL_INTERVAL,
    RETRY_MAX_INTERVAL,
)
from langchat.domain.bootstrap import BootstrapDecision, ProfileCompletion, SessionStatus
from langchat.domain.connectivity import ConnectivityState
from langchat.utils.events import Observable, Signal
from langchat.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from langchat.app.ports.presenter import RootPresenterPort
    from langchat.app.ports.session import ProfileSyncPort, SessionServicePort
    from langchat.app.services.connectivity_monitor import ConnectivityMonitor

logger = get_cached_logger(__name__)

TERMINAL_DECISIONS = frozenset(
    {
        BootstrapDecision.MAIN_APP,
        BootstrapDecision.ONBOARDING,
        BootstrapDecision.AUTHENTICATION,
    }
)


class BootstrapCoordinator(Observable):
    """Orchestrates the connectivity-gated startup sequence.

    Signals:
        decision_changed: Emitted whenever the visible root changes (BootstrapDecision)
        settled: Emitted once the sequence reaches a terminal decision
    """

    decision_changed = Signal(BootstrapDecision)
    settled = Signal(BootstrapDecision)

    def __init__(
        self,
        monitor: ConnectivityMonitor,
        session_service: SessionServicePort,
        profile_sync: ProfileSyncPort,
        presenter: RootPresenterPort | None = None,
        *,
        scheduler: RetryScheduler | None = None,
        retry_initial_interval: float = RETRY_INITIAL_INTERVAL,
        retry_max_interval: float = RETRY_MAX_INTERVAL,
        profile_timeout: float = PROFILE_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the coordinator.

        Args:
            monitor: Connectivity monitor, already constructed
            session_service: Auth/profile-completion collaborator
            profile_sync: Local profile sync collaborator
            presenter: Root screen presenter (None for headless use)
            scheduler: Retry scheduler; one probing the monitor is created if omitted
            retry_initial_interval: First offline retry interval, seconds
            retry_max_interval: Retry interval cap, seconds
            profile_timeout: Bound for the profile-completion and sync calls

        """
        super().__init__()
        self._monitor = monitor
        self._session_service = session_service
        self._profile_sync = profile_sync
        self._presenter = presenter
        self._scheduler = scheduler or RetryScheduler(monitor.check_backend_reachable)
        self._retry_initial_interval = retry_initial_interval
        self._retry_max_interval = retry_max_interval
        self._profile_timeout = profile_timeout

        self._decision: BootstrapDecision | None = None
        self._running = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._check_task: asyncio.Task | None = None

        self._scheduler.restored.connect(self._on_restored)
        self._monitor.connectivity_changed.connect(self._on_connectivity_changed)

    @property
    def decision(self) -> BootstrapDecision | None:
        return self._decision

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def scheduler(self) -> RetryScheduler:
        return self._scheduler

    def start(self) -> bool:
        """Start the bootstrap sequence on the running event loop.

        Returns:
            False if a sequence is already active (the call is ignored)

        """
        if self._running:
            logger.warning("[BootstrapCoordinator] start() rejected, bootstrap already running")
            return False

        self._loop = asyncio.get_running_loop()
        self._running = True
        logger.info("[BootstrapCoordinator] Bootstrap started")
        self._present(BootstrapDecision.LOADING)
        self._spawn_check()
        return True

    def retry_now(self) -> bool:
        """Manual retry from the offline screen."""
        if not self._running or self._decision is not BootstrapDecision.OFFLINE:
            logger.debug(
                "[BootstrapCoordinator] Manual retry ignored (decision=%s)",
                self._decision.value if self._decision else None,
                extra={"dev_only": True},
            )
            return False
        return self._scheduler.retry_now()

    async def join(self) -> None:
        """Wait for the in-flight reachability/session check, if any."""
        while self._check_task is not None:
            task = self._check_task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if self._check_task is task:
                break

    async def run_until_settled(self) -> BootstrapDecision:
        """Start (if needed) and wait for a terminal decision."""
        settled: asyncio.Future = asyncio.get_running_loop().create_future()

        def _on_settled(decision: BootstrapDecision) -> None:
            if not settled.done():
                settled.set_result(decision)

        self.settled.connect(_on_settled)
        try:
            if self._decision in TERMINAL_DECISIONS and not self._running:
                return self._decision
            if not self._running:
                self.start()
            return await settled
        finally:
            self.settled.disconnect(_on_settled)

    def dispose(self) -> None:
        """Tear down: stop retries first, then detach and cancel."""
        self._scheduler.stop()
        self._scheduler.restored.disconnect(self._on_restored)
        self._monitor.connectivity_changed.disconnect(self._on_connectivity_changed)

        if self._check_task is not None and not self._check_task.done():
            self._check_task.cancel()
        self._check_task = None
        self._running = False
        self.disconnect_all()
        logger.debug("[BootstrapCoordinator] Disposed", extra={"dev_only": True})

    def _spawn_check(self) -> None:
        if self._check_task is not None and not self._check_task.done():
            logger.debug(
                "[BootstrapCoordinator] Check already in flight", extra={"dev_only": True}
            )
            return
        self._check_task = self._loop.create_task(self._check_and_route())

    async def _check_and_route(self) -> None:
        try:
            reachable = await self._monitor.check_backend_reachable()
            if not reachable:
                self._enter_offline()
                return

            status = await self._resolve_session()
            decision = status.decide()
            if decision is BootstrapDecision.OFFLINE:
                logger.warning(
                    "[BootstrapCoordinator] Valid session but profile state unknown, going offline"
                )
                self._enter_offline()
                return

            if decision is BootstrapDecision.MAIN_APP:
                await self._sync_profile()

            self._settle(decision)
        except Exception:
            logger.exception("[BootstrapCoordinator] Unexpected error during bootstrap")
            self._enter_offline()

    async def _resolve_session(self) -> SessionStatus:
        try:
            authenticated = bool(self._session_service.is_authenticated())
        except Exception:
            logger.warning(
                "[BootstrapCoordinator] Local session check failed, treating as signed out",
                exc_info=True,
            )
            return SessionStatus(authenticated=False)

        logger.info("[BootstrapCoordinator] Session check - authenticated: %s", authenticated)
        if not authenticated:
            return SessionStatus(authenticated=False)

        try:
            completed = await asyncio.wait_for(
                self._session_service.fetch_profile_completion(), timeout=self._profile_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("[BootstrapCoordinator] Profile completion check timed out")
            return SessionStatus(True, ProfileCompletion.INDETERMINATE)
        except Exception as e:
            logger.warning("[BootstrapCoordinator] Profile completion check failed: %s", e)
            return SessionStatus(True, ProfileCompletion.INDETERMINATE)

        return SessionStatus(True, ProfileCompletion.from_flag(bool(completed)))

    async def _sync_profile(self) -> None:
        try:
            await asyncio.wait_for(
                self._profile_sync.sync_profile_locally(), timeout=self._profile_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("[BootstrapCoordinator] Profile sync timed out, continuing")
        except Exception as e:
            logger.warning("[BootstrapCoordinator] Profile sync failed, continuing: %s", e)

    def _enter_offline(self) -> None:
        self._present(BootstrapDecision.OFFLINE)
        if not self._running or self._scheduler.is_running:
            return
        try:
            self._scheduler.start(self._retry_initial_interval, self._retry_max_interval)
        except Exception:
            logger.exception("[BootstrapCoordinator] Could not start offline retries")

    def _settle(self, decision: BootstrapDecision) -> None:
        self._scheduler.stop()
        self._running = False
        self._present(decision)
        logger.info("[BootstrapCoordinator] Bootstrap settled on %s", decision.value)
        self.settled.emit(decision)

    def _present(self, decision: BootstrapDecision) -> None:
        if decision is self._decision:
            return
        self._decision = decision
        logger.info("[BootstrapCoordinator] Root -> %s", decision.value)

        if self._presenter is not None:
            try:
                self._presenter.present(decision)
            except Exception:
                logger.exception("[BootstrapCoordinator] Presenter failed for %s", decision.value)

        self.decision_changed.emit(decision)

    def _on_restored(self) -> None:
        if not self._running:
            return
        logger.info("[BootstrapCoordinator] Retry restored connectivity, re-checking")
        self._spawn_check()

    def _on_connectivity_changed(self, state: ConnectivityState) -> None:
        if state is not ConnectivityState.CONNECTED:
            return
        if not self._running or self._decision is not BootstrapDecision.OFFLINE:
            return
        if self._check_task is not None and not self._check_task.done():
            return

        logger.info("[BootstrapCoordinator] Network came back, re-checking immediately")
        self._scheduler.stop()
        self._spawn_check()
