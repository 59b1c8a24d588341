from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_RECONNECT_INTERVAL_S = 3.0


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ConnectionState.CONNECTING: "Connecting",
    ConnectionState.OPEN: "Connected",
    ConnectionState.CLOSED: "Disconnected",
}


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Anything that can schedule a callback; asyncio loops qualify."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class Transport(Protocol):
    def open(self, url: str, listener: ConnectionManager) -> None: ...

    def send(self, text: str) -> None: ...

    def close(self) -> None: ...


StateListener = Callable[[ConnectionState, ConnectionState], None]
MessageListener = Callable[[str], None]
ErrorListener = Callable[[BaseException], None]


class ConnectionManager:
    """
    Owns the single transport connection and keeps it alive.

    Connecting -> Open -> Closed -> Connecting -> ... with a fixed-interval
    reconnect timer that keeps firing until a connection succeeds. The
    transport reports lifecycle events back through the handle_* methods.
    """

    def __init__(
        self,
        transport: Transport,
        url: str,
        *,
        reconnect_interval_s: float = DEFAULT_RECONNECT_INTERVAL_S,
        clock: Clock | None = None,
    ):
        self.transport = transport
        self.url = url
        self.reconnect_interval_s = reconnect_interval_s
        self._clock = clock
        self.state = ConnectionState.CLOSED
        self._reconnect_timer: TimerHandle | None = None
        self._running = False

        self._state_listeners: list[StateListener] = []
        self._message_listeners: list[MessageListener] = []
        self._error_listeners: list[ErrorListener] = []

    # listeners

    def add_state_listener(self, fn: StateListener) -> None:
        self._state_listeners.append(fn)

    def add_message_listener(self, fn: MessageListener) -> None:
        self._message_listeners.append(fn)

    def add_error_listener(self, fn: ErrorListener) -> None:
        self._error_listeners.append(fn)

    # lifecycle

    @property
    def is_open(self) -> bool:
        return self.state is ConnectionState.OPEN

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_timer is not None

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._connect()

    def stop(self) -> None:
        self._running = False
        self._cancel_reconnect()
        self.transport.close()
        self._set_state(ConnectionState.CLOSED)

    def send(self, text: str) -> bool:
        """Transmit if open; otherwise drop the frame. Never queued, never raises."""
        if self.state is not ConnectionState.OPEN:
            return False
        try:
            self.transport.send(text)
        except Exception:
            logger.exception("send failed; dropping frame")
            return False
        return True

    # transport events

    def handle_open(self) -> None:
        if not self._running:
            return
        self._cancel_reconnect()
        self._set_state(ConnectionState.OPEN)

    def handle_close(self) -> None:
        self._set_state(ConnectionState.CLOSED)
        if self._running and self._reconnect_timer is None:
            self._arm_reconnect()

    def handle_error(self, exc: BaseException) -> None:
        # Errors are only reported; the close that follows drives the transition.
        logger.warning("transport error: %r", exc)
        for fn in list(self._error_listeners):
            try:
                fn(exc)
            except Exception:
                logger.exception("error listener failed")

    def handle_message(self, raw: str) -> None:
        for fn in list(self._message_listeners):
            try:
                fn(raw)
            except Exception:
                logger.exception("message listener failed")

    # internals

    def _connect(self) -> None:
        self._set_state(ConnectionState.CONNECTING)
        self.transport.open(self.url, self)

    def _arm_reconnect(self) -> None:
        clock = self._clock or asyncio.get_running_loop()
        self._reconnect_timer = clock.call_later(self.reconnect_interval_s, self._on_reconnect_timer)

    def _cancel_reconnect(self) -> None:
        timer, self._reconnect_timer = self._reconnect_timer, None
        if timer is not None:
            timer.cancel()

    def _on_reconnect_timer(self) -> None:
        self._reconnect_timer = None
        if not self._running or self.state is ConnectionState.OPEN:
            return
        logger.info("attempting to reconnect to %s", self.url)
        # Re-arm first so a hung or failed attempt is retried one interval later.
        self._arm_reconnect()
        self._connect()

    def _set_state(self, new: ConnectionState) -> None:
        old = self.state
        if old is new:
            return
        self.state = new
        if new is ConnectionState.OPEN:
            logger.info("connected to %s", self.url)
        elif new is ConnectionState.CLOSED and old is ConnectionState.OPEN:
            logger.warning("disconnected from %s", self.url)
        else:
            logger.debug("connection %s -> %s", old.value, new.value)
        for fn in list(self._state_listeners):
            try:
                fn(old, new)
            except Exception:
                logger.exception("state listener failed")
