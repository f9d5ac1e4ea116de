"""Tests for realtime publisher adapters and the publisher registry."""

import asyncio

import pytest

from inpatient.realtime import get_publisher, reset_publisher, set_publisher
from inpatient.realtime.memory import InMemoryPublisher
from inpatient.realtime.websocket import WebSocketBroadcaster


class FakeSocket:
    def __init__(self, fail=False):
        self.accepted = False
        self.sent = []
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


class TestInMemoryPublisher:
    def setup_method(self):
        self.publisher = InMemoryPublisher()

    def test_records_broadcasts(self):
        self.publisher.publish("bedDeleted", {"wardId": "icu", "bedId": "ICU-01"})
        assert self.publisher.published == [{"event": "bedDeleted", "data": {"wardId": "icu", "bedId": "ICU-01"}}]

    def test_filter_by_event_name(self):
        self.publisher.publish("wardDeleted", "icu")
        self.publisher.publish("bedDeleted", {"bedId": "GEN-01"})
        assert len(self.publisher.events("wardDeleted")) == 1
        assert len(self.publisher.events()) == 2

    def test_configured_failure(self):
        self.publisher.configure(should_fail=True, failure_reason="down")
        with pytest.raises(ConnectionError, match="down"):
            self.publisher.publish("wardDeleted", "icu")
        assert self.publisher.published == []

    def test_reset(self):
        self.publisher.publish("wardDeleted", "icu")
        self.publisher.configure(should_fail=True)
        self.publisher.reset()
        assert self.publisher.published == []
        assert self.publisher.should_fail is False


class TestWebSocketBroadcaster:
    def test_fans_out_to_every_client(self):
        async def scenario():
            broadcaster = WebSocketBroadcaster()
            first, second = FakeSocket(), FakeSocket()
            await broadcaster.connect(first)
            await broadcaster.connect(second)
            broadcaster.publish("bedUpdated", {"id": "ICU-01"})
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            return broadcaster, first, second

        broadcaster, first, second = asyncio.run(scenario())
        assert first.accepted and second.accepted
        assert first.sent == [{"event": "bedUpdated", "data": {"id": "ICU-01"}}]
        assert second.sent == first.sent
        assert broadcaster.connection_count == 2

    def test_failed_client_is_dropped(self):
        async def scenario():
            broadcaster = WebSocketBroadcaster()
            healthy, broken = FakeSocket(), FakeSocket(fail=True)
            await broadcaster.connect(healthy)
            await broadcaster.connect(broken)
            broadcaster.publish("wardDeleted", "icu")
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            return broadcaster, healthy

        broadcaster, healthy = asyncio.run(scenario())
        assert healthy.sent == [{"event": "wardDeleted", "data": "icu"}]
        assert broadcaster.connection_count == 1

    def test_disconnect(self):
        async def scenario():
            broadcaster = WebSocketBroadcaster()
            socket = FakeSocket()
            await broadcaster.connect(socket)
            broadcaster.disconnect(socket)
            return broadcaster

        assert asyncio.run(scenario()).connection_count == 0

    def test_publish_outside_event_loop_is_skipped(self):
        broadcaster = WebSocketBroadcaster()
        socket = FakeSocket()
        asyncio.run(broadcaster.connect(socket))
        broadcaster.publish("wardDeleted", "icu")
        assert socket.sent == []


class TestPublisherRegistry:
    def setup_method(self):
        reset_publisher()

    def test_defaults_to_in_memory(self, monkeypatch):
        monkeypatch.delenv("REALTIME_PUBLISHER", raising=False)
        assert isinstance(get_publisher(), InMemoryPublisher)

    def test_websocket_from_environment(self, monkeypatch):
        monkeypatch.setenv("REALTIME_PUBLISHER", "websocket")
        assert isinstance(get_publisher(), WebSocketBroadcaster)

    def test_unknown_adapter_fails(self, monkeypatch):
        monkeypatch.setenv("REALTIME_PUBLISHER", "carrier-pigeon")
        with pytest.raises(ValueError, match="carrier-pigeon"):
            get_publisher()

    def test_singleton(self, monkeypatch):
        monkeypatch.delenv("REALTIME_PUBLISHER", raising=False)
        assert get_publisher() is get_publisher()

    def test_installed_publisher_wins(self, monkeypatch):
        monkeypatch.setenv("REALTIME_PUBLISHER", "websocket")
        installed = set_publisher(InMemoryPublisher())
        assert get_publisher() is installed
