"""Module: probe.py

SupabaseReachabilityProbe - application-level reachability check.

Sends a HEAD request to the PostgREST root with the anon key. Any answer
from the application (2xx-4xx) means the backend is up, even a 401.
5xx means the service behind the gateway is down.
"""

from __future__ import annotations

import httpx

from langchat.config import REACHABILITY_TIMEOUT_SECONDS
from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

REST_ROOT = "/rest/v1/"


class SupabaseReachabilityProbe:
    """BackendProbePort implementation over httpx.

    Transport errors (DNS, TLS, timeouts) propagate as httpx exceptions;
    ConnectivityMonitor turns them into "unreachable".
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = REACHABILITY_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def url(self) -> str:
        return f"{self._base_url}{REST_ROOT}"

    async def ping(self) -> bool:
        if not self._base_url:
            raise ValueError("SUPABASE_URL is not configured")

        response = await self._get_client().head(
            self.url,
            headers={"apikey": self._anon_key},
            timeout=self._timeout,
        )
        reachable = 200 <= response.status_code < 500
        logger.debug(
            "[SupabaseProbe] HEAD %s -> %d",
            self.url,
            response.status_code,
            extra={"dev_only": True},
        )
        return reachable

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client
