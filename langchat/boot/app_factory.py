"""Application factory - creates the fully wired bootstrap object graph.

No ambient singletons: every service is constructed here, handed its
collaborators explicitly, and torn down by AppComponents.aclose().
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx

from langchat.app.services import (
    BootstrapCoordinator,
    ConnectivityMonitor,
    OfflineBannerModel,
    RetryScheduler,
)
from langchat.config import (
    PATH_POLL_INTERVAL,
    REACHABILITY_TIMEOUT_SECONDS,
    SUPABASE_ACCESS_TOKEN,
    SUPABASE_ANON_KEY,
    SUPABASE_URL,
    SUPABASE_USER_ID,
)
from langchat.infra.backend import SupabaseReachabilityProbe, SupabaseSessionService
from langchat.infra.network import InterfacePathWatcher
from langchat.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from langchat.app.ports import (
        BackendProbePort,
        NetworkPathPort,
        ProfileSyncPort,
        RootPresenterPort,
        SessionServicePort,
    )

logger = get_cached_logger(__name__)


class AppComponents:
    """Container for the wired bootstrap components.

    start() and aclose() must run on the event loop passed to create_app().
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        monitor: ConnectivityMonitor,
        scheduler: RetryScheduler,
        coordinator: BootstrapCoordinator,
        banner: OfflineBannerModel,
        session_service: SessionServicePort,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.loop = loop
        self.monitor = monitor
        self.scheduler = scheduler
        self.coordinator = coordinator
        self.banner = banner
        self.session_service = session_service
        self.http_client = http_client
        self._closed = False

    def start(self) -> bool:
        """Start path monitoring, then the bootstrap sequence."""
        self.monitor.start_monitoring()
        self.banner.attach(self.monitor)
        return self.coordinator.start()

    async def aclose(self) -> None:
        """Ordered teardown: retries first, then subscribers, then I/O."""
        if self._closed:
            return
        self._closed = True

        self.coordinator.dispose()
        self.banner.detach()
        # Path source stop joins its polling thread
        await asyncio.get_running_loop().run_in_executor(None, self.monitor.stop_monitoring)
        self.monitor.dispose()
        if self.http_client is not None:
            await self.http_client.aclose()

        logger.info("[boot] Application components closed")


def create_app(
    loop: asyncio.AbstractEventLoop,
    presenter: RootPresenterPort | None = None,
    *,
    path_source: NetworkPathPort | None = None,
    probe: BackendProbePort | None = None,
    session_service: SessionServicePort | None = None,
    profile_sync: ProfileSyncPort | None = None,
) -> AppComponents:
    """Create the bootstrap components with production collaborators.

    Any collaborator can be overridden (tests, demos).

    Args:
        loop: Event loop the services will run on
        presenter: Root screen presenter (None for headless runs)
        path_source: Network path observer override
        probe: Backend probe override
        session_service: Session service override
        profile_sync: Profile sync override (defaults to the session service)

    Returns:
        AppComponents with everything wired, not started

    """
    http_client: httpx.AsyncClient | None = None
    if probe is None or session_service is None:
        if not SUPABASE_URL:
            logger.warning("[boot] SUPABASE_URL is not set; the backend will be unreachable")
        http_client = httpx.AsyncClient()

    if path_source is None:
        path_source = InterfacePathWatcher(PATH_POLL_INTERVAL)
    if probe is None:
        probe = SupabaseReachabilityProbe(SUPABASE_URL, SUPABASE_ANON_KEY, client=http_client)
    if session_service is None:
        session_service = SupabaseSessionService(
            SUPABASE_URL,
            SUPABASE_ANON_KEY,
            access_token=SUPABASE_ACCESS_TOKEN,
            user_id=SUPABASE_USER_ID,
            client=http_client,
        )
    if profile_sync is None:
        profile_sync = session_service  # type: ignore[assignment]

    monitor = ConnectivityMonitor(
        path_source,
        probe,
        probe_timeout=REACHABILITY_TIMEOUT_SECONDS,
        dispatch=loop.call_soon_threadsafe,
    )
    scheduler = RetryScheduler(monitor.check_backend_reachable)
    coordinator = BootstrapCoordinator(
        monitor,
        session_service,
        profile_sync,
        presenter,
        scheduler=scheduler,
    )
    banner = OfflineBannerModel(call_later=loop.call_later)

    logger.info("[boot] Application components created")
    return AppComponents(
        loop=loop,
        monitor=monitor,
        scheduler=scheduler,
        coordinator=coordinator,
        banner=banner,
        session_service=session_service,
        http_client=http_client,
    )
