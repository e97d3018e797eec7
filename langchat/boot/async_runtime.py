"""Module: async_runtime.py

AsyncRuntime - an asyncio event loop on a dedicated daemon thread.

The Qt main thread owns the widgets; the bootstrap services live on this
loop. Work crosses over with call_soon() / submit() in one direction and
queued Qt signals in the other.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from collections.abc import Callable, Coroutine
from typing import Any

from langchat.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class AsyncRuntime:
    """Owns an event loop running on a background thread."""

    def __init__(self, name: str = "langchat-async") -> None:
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            raise RuntimeError("AsyncRuntime is not started")
        return self._loop

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> AsyncRuntime:
        if self.is_running:
            return self
        self._ready.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        self._ready.wait()
        logger.debug("[AsyncRuntime] Loop started", extra={"dev_only": True})
        return self

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule a plain callback on the loop thread (thread-safe)."""
        self.loop.call_soon_threadsafe(callback, *args)

    def submit(self, coro: Coroutine[Any, Any, Any]) -> concurrent.futures.Future:
        """Run a coroutine on the loop; returns a thread-safe future."""
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def call(self, func: Callable[[], Any], timeout: float | None = None) -> Any:
        """Run a plain callable on the loop thread and wait for its result."""

        async def _invoke() -> Any:
            return func()

        return self.submit(_invoke()).result(timeout)

    def stop(self, timeout: float = 5.0) -> None:
        if not self.is_running:
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout=timeout)
        self._thread = None
        logger.debug("[AsyncRuntime] Loop stopped", extra={"dev_only": True})

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            if pending:
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()
            self._loop = None
