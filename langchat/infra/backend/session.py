"""Module: session.py

SupabaseSessionService - session state and profile queries against the
Supabase REST API.

The stored session (access token + user id) is handed over by the auth
flow; is_authenticated() only looks at it and never touches the network.
The synced profile lives in memory for the lifetime of the process.
"""

from __future__ import annotations

from typing import Any

import httpx

from langchat.app.ports.session import SessionServiceError
from langchat.config import PROFILE_REQUEST_TIMEOUT_SECONDS
from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

PROFILES_PATH = "/rest/v1/profiles"


class SupabaseSessionService:
    """SessionServicePort and ProfileSyncPort over the profiles table."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        access_token: str = "",
        user_id: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = PROFILE_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._access_token = access_token
        self._user_id = user_id
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._profile: dict[str, Any] | None = None

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def cached_profile(self) -> dict[str, Any] | None:
        """Profile row copied by the last successful sync, if any."""
        return self._profile

    def set_session(self, access_token: str, user_id: str) -> None:
        self._access_token = access_token
        self._user_id = user_id
        self._profile = None

    def clear_session(self) -> None:
        self.set_session("", "")

    def is_authenticated(self) -> bool:
        return bool(self._access_token and self._user_id)

    async def fetch_profile_completion(self) -> bool:
        """Whether the signed-in user finished onboarding.

        No profile row is a confirmed "no". Any failure raises
        SessionServiceError.
        """
        rows = await self._select_profile("onboarding_completed")
        if not rows:
            logger.info("[SupabaseSession] No profile row for user, onboarding required")
            return False
        return bool(rows[0].get("onboarding_completed"))

    async def sync_profile_locally(self) -> None:
        rows = await self._select_profile("*")
        if not rows:
            raise SessionServiceError("profile row missing")
        self._profile = dict(rows[0])
        logger.info("[SupabaseSession] Profile synced locally")

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _select_profile(self, columns: str) -> list[dict[str, Any]]:
        if not self.is_authenticated():
            raise SessionServiceError("not authenticated")

        try:
            response = await self._get_client().get(
                f"{self._base_url}{PROFILES_PATH}",
                params={"id": f"eq.{self._user_id}", "select": columns},
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise SessionServiceError(f"profile request failed: {e}") from e

        if response.status_code >= 400:
            raise SessionServiceError(f"profile request returned HTTP {response.status_code}")

        try:
            rows = response.json()
        except ValueError as e:
            raise SessionServiceError("profile response is not JSON") from e

        if not isinstance(rows, list):
            raise SessionServiceError("unexpected profile response shape")
        return rows

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client
