from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

import websockets
from websockets.exceptions import WebSocketException

if TYPE_CHECKING:
    from .connection import ConnectionManager

logger = logging.getLogger(__name__)


def ws_url_for(page_url: str, path: str = "/ws") -> str:
    """
    Relay URL for a page served over http(s): wss for https, ws otherwise.

    ws:// and wss:// URLs are returned unchanged.
    """
    parts = urlsplit(page_url)
    if parts.scheme in ("ws", "wss"):
        return page_url
    scheme = "wss" if parts.scheme == "https" else "ws"
    return urlunsplit((scheme, parts.netloc, path, "", ""))


class WebSocketTransport:
    """
    One websocket at a time, driven by a task per connection attempt.

    Lifecycle is reported to the listener (a ConnectionManager): handle_open
    after the handshake, handle_message per text frame, handle_error on a
    fault, then handle_close exactly once per attempt.
    """

    def __init__(self, *, ping_interval: float = 20, ping_timeout: float = 20, open_timeout: float = 10):
        self.ping_interval = ping_interval
        self.ping_timeout = ping_timeout
        self.open_timeout = open_timeout
        self._task: asyncio.Task[None] | None = None
        self._outbox: asyncio.Queue[str] | None = None

    def open(self, url: str, listener: ConnectionManager) -> None:
        self.close()
        self._outbox = asyncio.Queue()
        self._task = asyncio.get_running_loop().create_task(self._run(url, listener, self._outbox))

    def send(self, text: str) -> None:
        if self._outbox is None:
            return
        self._outbox.put_nowait(text)

    def close(self) -> None:
        task, self._task = self._task, None
        self._outbox = None
        if task is not None and not task.done():
            # A cancelled attempt reports nothing; the caller already knows.
            task.cancel()

    async def _run(self, url: str, listener: ConnectionManager, outbox: asyncio.Queue[str]) -> None:
        try:
            async with websockets.connect(
                url,
                ping_interval=self.ping_interval,
                ping_timeout=self.ping_timeout,
                open_timeout=self.open_timeout,
            ) as ws:
                listener.handle_open()
                writer = asyncio.create_task(self._drain(ws, outbox))
                try:
                    async for raw in ws:
                        if isinstance(raw, bytes):
                            raw = raw.decode("utf-8", errors="replace")
                        listener.handle_message(raw)
                finally:
                    writer.cancel()
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            listener.handle_error(e)
        except Exception as e:
            logger.exception("unexpected transport failure")
            listener.handle_error(e)
        listener.handle_close()

    @staticmethod
    async def _drain(ws, outbox: asyncio.Queue[str]) -> None:
        try:
            while True:
                text = await outbox.get()
                await ws.send(text)
        except WebSocketException as e:
            # The reader side sees the same close and reports it.
            logger.debug("writer stopped: %r", e)
