"""
Test Suite: Change broadcast buses.
"""

import sys

import pytest

from core.broadcast import (
    BROADCAST_NAME,
    FileBroadcastBus,
    LocalBroadcastBus,
    create_default_bus,
)


class TestLocalBroadcastBus:
    def test_post_reaches_each_subscriber_once(self):
        bus = LocalBroadcastBus()
        calls = []
        bus.subscribe(BROADCAST_NAME, lambda: calls.append("a"))
        bus.subscribe(BROADCAST_NAME, lambda: calls.append("b"))

        bus.post(BROADCAST_NAME)

        assert sorted(calls) == ["a", "b"]

    def test_other_names_are_not_delivered(self):
        bus = LocalBroadcastBus()
        calls = []
        bus.subscribe("Other", lambda: calls.append(1))

        bus.post(BROADCAST_NAME)

        assert calls == []

    def test_unsubscribe_stops_delivery(self):
        bus = LocalBroadcastBus()
        calls = []
        subscription = bus.subscribe(BROADCAST_NAME, lambda: calls.append(1))

        bus.unsubscribe(subscription)
        bus.post(BROADCAST_NAME)

        assert calls == []
        assert bus.listener_count(BROADCAST_NAME) == 0

    def test_failing_listener_does_not_block_others(self):
        bus = LocalBroadcastBus()
        calls = []

        def explode():
            raise RuntimeError("boom")

        bus.subscribe(BROADCAST_NAME, explode)
        bus.subscribe(BROADCAST_NAME, lambda: calls.append(1))

        bus.post(BROADCAST_NAME)

        assert calls == [1]


class TestFileBroadcastBus:
    def test_post_reaches_other_bus_instance(self, tmp_path, qtbot):
        listener = FileBroadcastBus(tmp_path)
        poster = FileBroadcastBus(tmp_path)
        calls = []
        listener.subscribe(BROADCAST_NAME, lambda: calls.append(1))

        poster.post(BROADCAST_NAME)

        qtbot.waitUntil(lambda: len(calls) >= 1, timeout=3000)

    def test_subscribe_creates_stamp(self, tmp_path):
        bus = FileBroadcastBus(tmp_path / "nested")

        bus.subscribe(BROADCAST_NAME, lambda: None)

        assert bus.stamp_path(BROADCAST_NAME).exists()

    def test_unsubscribed_listener_is_not_called(self, tmp_path, qtbot):
        listener = FileBroadcastBus(tmp_path)
        calls = []
        subscription = listener.subscribe(BROADCAST_NAME, lambda: calls.append(1))
        listener.unsubscribe(subscription)

        FileBroadcastBus(tmp_path).post(BROADCAST_NAME)
        qtbot.wait(200)

        assert calls == []


@pytest.mark.skipif(sys.platform == "darwin", reason="macOS uses the distributed notification center")
def test_default_bus_off_macos_is_file_based(qtbot):
    assert isinstance(create_default_bus(), FileBroadcastBus)
