from __future__ import annotations

import pytest

from touchsync.client import Identity, TouchSyncClient
from touchsync.client.config import ClientSettings


class FakeTimer:
    def __init__(self, clock: FakeClock, when: float, callback):
        self.clock = clock
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        if not self.cancelled and not self.fired:
            self.clock.cancel_count += 1
        self.cancelled = True


class FakeClock:
    """Manual-advance stand-in for an event loop's call_later."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []
        self.cancel_count = 0

    def call_later(self, delay, callback):
        t = FakeTimer(self, self.now + delay, callback)
        self.timers.append(t)
        return t

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, dt: float) -> None:
        self.now += dt
        while True:
            due = sorted((t for t in self.pending if t.when <= self.now + 1e-9), key=lambda t: t.when)
            if not due:
                return
            t = due[0]
            t.fired = True
            t.callback()


class FakeTransport:
    def __init__(self):
        self.listener = None
        self.url = None
        self.opens = 0
        self.closes = 0
        self.sent: list[str] = []

    def open(self, url, listener):
        self.opens += 1
        self.url = url
        self.listener = listener

    def send(self, text):
        self.sent.append(text)

    def close(self):
        self.closes += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(clock, transport) -> TouchSyncClient:
    settings = ClientSettings(relay_url="ws://relay.test/ws", reconnect_interval_s=3.0)
    return TouchSyncClient(
        settings=settings,
        identity=Identity(client_id="me0000000000", color="#00ff00"),
        transport=transport,
        clock=clock,
    )


@pytest.fixture
def online(client, transport) -> TouchSyncClient:
    client.start()
    transport.listener.handle_open()
    return client
