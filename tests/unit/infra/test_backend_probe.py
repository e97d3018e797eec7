"""Tests for SupabaseReachabilityProbe (httpx.MockTransport)."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from langchat.infra.backend.probe import SupabaseReachabilityProbe


def run_ping(handler, base_url: str = "https://demo.supabase.co/") -> bool:
    async def scenario() -> bool:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            probe = SupabaseReachabilityProbe(base_url, "anon-key", client=client)
            return await probe.ping()

    return asyncio.run(scenario())


class TestReachabilityProbe:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [(200, True), (204, True), (401, True), (404, True), (499, True), (500, False), (503, False)],
    )
    def test_status_classification(self, status: int, expected: bool) -> None:
        """Test any application-level answer counts as reachable."""
        assert run_ping(lambda request: httpx.Response(status)) is expected

    def test_request_shape(self) -> None:
        """Test the probe sends HEAD to the REST root with the anon key."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        run_ping(handler)

        assert len(seen) == 1
        assert seen[0].method == "HEAD"
        assert str(seen[0].url) == "https://demo.supabase.co/rest/v1/"
        assert seen[0].headers["apikey"] == "anon-key"

    def test_transport_error_propagates(self) -> None:
        """Test connection failures surface as httpx errors for the monitor to classify."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        with pytest.raises(httpx.ConnectError):
            run_ping(handler)

    def test_missing_url_raises(self) -> None:
        """Test an unconfigured backend is an error, not a silent success."""
        with pytest.raises(ValueError):
            run_ping(lambda request: httpx.Response(200), base_url="")
