"""Tests for newsrelay.broadcast and newsrelay.runtime."""

import threading

from newsrelay.broadcast import ObserverBus
from newsrelay.runtime import INVALIDATED, RuntimeKey, RuntimeState


class TestObserverBus:
    def test_broadcast_in_registration_order(self) -> None:
        bus = ObserverBus()
        calls = []
        bus.add(lambda: calls.append("first"))
        bus.add(lambda: calls.append("second"))

        bus.broadcast()

        assert calls == ["first", "second"]

    def test_none_is_a_no_op(self) -> None:
        bus = ObserverBus()

        assert bus.add(None) is False
        assert bus.remove(None) is False
        assert len(bus) == 0

    def test_remove(self) -> None:
        bus = ObserverBus()
        calls = []

        def observer() -> None:
            calls.append(1)

        bus.add(observer)
        assert bus.remove(observer)
        assert not bus.remove(observer)

        bus.broadcast()

        assert calls == []

    def test_runs_on_calling_thread(self) -> None:
        bus = ObserverBus()
        seen = []
        bus.add(lambda: seen.append(threading.current_thread().name))

        worker = threading.Thread(target=bus.broadcast, name="watcher")
        worker.start()
        worker.join()

        assert seen == ["watcher"]

    def test_observer_may_unregister_during_broadcast(self) -> None:
        bus = ObserverBus()
        calls = []

        def once() -> None:
            calls.append("once")
            bus.remove(once)

        bus.add(once)
        bus.add(lambda: calls.append("always"))

        bus.broadcast()
        bus.broadcast()

        assert calls == ["once", "always", "always"]


class TestRuntimeState:
    def test_absent_and_sentinel_are_distinct(self) -> None:
        state = RuntimeState()

        assert state.get(RuntimeKey.REDDIT_TOKEN) is None
        state.put(RuntimeKey.REDDIT_TOKEN, INVALIDATED)
        assert state.get(RuntimeKey.REDDIT_TOKEN) == "INVALIDATED"

    def test_snapshot_is_a_copy(self) -> None:
        state = RuntimeState()
        state.put(RuntimeKey.REDDIT_USERNAME, "seal")

        snapshot = state.snapshot()
        snapshot["reddit_username"] = "walrus"

        assert state.get(RuntimeKey.REDDIT_USERNAME) == "seal"
