"""Tests for the pure-Python Observable/Signal implementation."""

from __future__ import annotations

import threading

from langchat.utils.events import Observable, Signal


class Counter(Observable):
    value_changed = Signal(int)
    reset_done = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.value = 0

    def increment(self) -> None:
        self.value += 1
        self.value_changed.emit(self.value)


class TestSignalDelivery:
    def test_every_subscriber_receives_every_emission(self) -> None:
        """Test fan-out in connection order."""
        counter = Counter()
        calls: list[tuple[str, int]] = []
        counter.value_changed.connect(lambda v: calls.append(("a", v)))
        counter.value_changed.connect(lambda v: calls.append(("b", v)))

        counter.increment()
        counter.increment()

        assert calls == [("a", 1), ("b", 1), ("a", 2), ("b", 2)]

    def test_signals_are_per_instance(self) -> None:
        """Test subscribers of one object do not hear another."""
        first, second = Counter(), Counter()
        heard: list[int] = []
        first.value_changed.connect(heard.append)

        second.increment()

        assert heard == []

    def test_duplicate_connect_is_ignored(self) -> None:
        """Test connecting the same callback twice delivers once."""
        counter = Counter()
        heard: list[int] = []
        counter.value_changed.connect(heard.append)
        counter.value_changed.connect(heard.append)

        counter.increment()

        assert heard == [1]
        assert counter.value_changed.receivers() == 1

    def test_failing_subscriber_does_not_block_others(self) -> None:
        """Test an exception in one callback is logged, not propagated."""
        counter = Counter()
        heard: list[int] = []

        def broken(_value: int) -> None:
            raise RuntimeError("subscriber bug")

        counter.value_changed.connect(broken)
        counter.value_changed.connect(heard.append)

        counter.increment()

        assert heard == [1]

    def test_subscriber_may_disconnect_during_emit(self) -> None:
        """Test the callback list is snapshotted before delivery."""
        counter = Counter()
        heard: list[int] = []

        def once(value: int) -> None:
            heard.append(value)
            counter.value_changed.disconnect(once)

        counter.value_changed.connect(once)
        counter.increment()
        counter.increment()

        assert heard == [1]


class TestDisconnect:
    def test_disconnect_single_and_all(self) -> None:
        """Test targeted and blanket disconnects."""
        counter = Counter()
        a: list[int] = []
        b: list[int] = []
        counter.value_changed.connect(a.append)
        counter.value_changed.connect(b.append)

        counter.value_changed.disconnect(a.append)
        counter.increment()
        counter.value_changed.disconnect()
        counter.increment()

        assert a == []
        assert b == [1]

    def test_disconnect_all_covers_every_signal(self) -> None:
        """Test Observable.disconnect_all() clears inherited signals too."""

        class LoudCounter(Counter):
            overflow = Signal()

        counter = LoudCounter()
        counter.value_changed.connect(lambda v: None)
        counter.reset_done.connect(lambda: None)
        counter.overflow.connect(lambda: None)

        counter.disconnect_all()

        assert counter.value_changed.receivers() == 0
        assert counter.reset_done.receivers() == 0
        assert counter.overflow.receivers() == 0

    def test_disconnect_unknown_callback_is_noop(self) -> None:
        """Test removing a callback that was never connected."""
        Counter().value_changed.disconnect(print)


class TestThreadSafety:
    def test_concurrent_connect_and_emit(self) -> None:
        """Test subscribers added from several threads are all kept."""
        counter = Counter()
        heard: list[int] = []
        lock = threading.Lock()

        def subscribe() -> None:
            def callback(value: int) -> None:
                with lock:
                    heard.append(value)

            counter.value_changed.connect(callback)

        threads = [threading.Thread(target=subscribe) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        counter.increment()

        assert counter.value_changed.receivers() == 10
        assert heard == [1] * 10
