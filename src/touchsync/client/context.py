from __future__ import annotations

import asyncio
import logging

from .config import ClientSettings, get_settings
from .connection import Clock, ConnectionManager, Transport
from .identity import Identity
from .inputs import InputAdapter
from .local_touches import LocalTouchTracker
from .remote_touches import RemoteTouchStore
from .sync import TouchSync
from .transport import WebSocketTransport, ws_url_for

logger = logging.getLogger(__name__)


class TouchSyncClient:
    """
    One participant: identity, both touch stores, the connection and the sync
    engine, wired together once. Independent instances share nothing.
    """

    def __init__(
        self,
        *,
        settings: ClientSettings | None = None,
        identity: Identity | None = None,
        transport: Transport | None = None,
        clock: Clock | None = None,
    ):
        self.settings = settings or get_settings()
        self.identity = identity or Identity.generate()
        self.local = LocalTouchTracker(self.identity.color)
        self.remote = RemoteTouchStore()
        self.connection = ConnectionManager(
            transport or WebSocketTransport(),
            ws_url_for(self.settings.relay_url),
            reconnect_interval_s=self.settings.reconnect_interval_s,
            clock=clock,
        )
        self.sync = TouchSync(self.identity, self.local, self.remote, self.connection)
        self.inputs = InputAdapter(self.sync)
        self._stopped: asyncio.Event | None = None

        if self.settings.debug_log_msgs:
            self.connection.add_message_listener(self._log_frame)

    def start(self) -> None:
        logger.info("client %s initialized with color %s", self.identity.client_id, self.identity.color)
        self.connection.start()

    def stop(self) -> None:
        self.connection.stop()
        if self._stopped is not None:
            self._stopped.set()

    async def run(self) -> None:
        """Connect (and keep reconnecting) until stop() is called."""
        self._stopped = asyncio.Event()
        self.start()
        await self._stopped.wait()

    def _log_frame(self, raw: str) -> None:
        logger.info("[ws:%s] in %s", self.identity.short_id, raw)
