"""Tests for the composition root and the background event loop."""

from __future__ import annotations

import asyncio
import threading

import httpx
import pytest

from langchat.boot import AsyncRuntime, create_app
from langchat.domain.bootstrap import BootstrapDecision
from langchat.domain.connectivity import ConnectionType
from langchat.infra.backend import SupabaseReachabilityProbe, SupabaseSessionService
from langchat.infra.network import InterfacePathWatcher
from tests.mocks import FakePathSource, FakeProbe, FakeSessionService, RecordingPresenter


class TestCreateApp:
    def test_wires_fakes_and_settles(self) -> None:
        """Test injected collaborators are used end to end."""
        presenter = RecordingPresenter()
        source = FakePathSource(initial=(True, ConnectionType.WIFI))
        session = FakeSessionService(completion=False)

        async def scenario() -> BootstrapDecision:
            app = create_app(
                asyncio.get_running_loop(),
                presenter,
                path_source=source,
                probe=FakeProbe(True),
                session_service=session,
            )
            assert app.http_client is None
            app.start()
            try:
                return await app.coordinator.run_until_settled()
            finally:
                await app.aclose()

        decision = asyncio.run(scenario())

        assert decision is BootstrapDecision.ONBOARDING
        assert presenter.decisions == [BootstrapDecision.LOADING, BootstrapDecision.ONBOARDING]
        assert source.stop_calls == 1

    def test_production_collaborators_share_one_client(self) -> None:
        """Test default wiring builds the psutil watcher and httpx services."""

        async def scenario():
            app = create_app(asyncio.get_running_loop())
            try:
                assert isinstance(app.monitor._path_source, InterfacePathWatcher)
                assert isinstance(app.monitor._probe, SupabaseReachabilityProbe)
                assert isinstance(app.session_service, SupabaseSessionService)
                assert isinstance(app.http_client, httpx.AsyncClient)
            finally:
                await app.aclose()
            return app

        app = asyncio.run(scenario())

        assert app.http_client.is_closed

    def test_aclose_is_idempotent(self) -> None:
        """Test teardown may be requested twice."""

        async def scenario() -> None:
            app = create_app(
                asyncio.get_running_loop(),
                path_source=FakePathSource(),
                probe=FakeProbe(),
                session_service=FakeSessionService(),
            )
            await app.aclose()
            await app.aclose()

        asyncio.run(scenario())


class TestAsyncRuntime:
    def test_runs_work_on_its_own_thread(self) -> None:
        """Test call() and submit() execute on the loop thread."""
        runtime = AsyncRuntime().start()
        try:
            loop_thread = runtime.call(threading.get_ident)

            async def answer() -> int:
                await asyncio.sleep(0)
                return 42

            assert runtime.submit(answer()).result(timeout=2.0) == 42
            assert loop_thread != threading.get_ident()
        finally:
            runtime.stop()

        assert runtime.is_running is False
        with pytest.raises(RuntimeError):
            _ = runtime.loop

    def test_call_soon_is_thread_safe(self) -> None:
        """Test callbacks scheduled from another thread run on the loop."""
        runtime = AsyncRuntime().start()
        done = threading.Event()
        try:
            runtime.call_soon(done.set)
            assert done.wait(timeout=2.0)
        finally:
            runtime.stop()

    def test_stop_cancels_pending_tasks(self) -> None:
        """Test long-running tasks do not keep the loop alive."""
        runtime = AsyncRuntime().start()
        future = runtime.submit(asyncio.sleep(3600))

        runtime.stop()

        assert future.cancelled() or future.done()


class TestAppTeardown:
    def test_path_source_stopped_off_the_loop_thread(self) -> None:
        """Test joining the polling thread never blocks the event loop."""
        source = FakePathSource()

        async def scenario() -> int:
            app = create_app(
                asyncio.get_running_loop(),
                path_source=source,
                probe=FakeProbe(),
                session_service=FakeSessionService(),
            )
            app.monitor.start_monitoring()
            await app.aclose()
            return threading.get_ident()

        loop_thread = asyncio.run(scenario())

        assert source.stop_calls == 1
        assert source.stop_thread is not None
        assert source.stop_thread != loop_thread
