from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import WebSocket

from touchsync.protocol import ClearTouches, ProtocolError, TouchUpdate, decode_message, encode_message

logger = logging.getLogger(__name__)


@dataclass
class Peer:
    ws: WebSocket
    # Last clientId seen on this socket and whether its last frame left it touching.
    client_id: str | None = None
    touching: bool = False

    def observe(self, raw: str) -> None:
        try:
            msg = decode_message(raw)
        except ProtocolError:
            return
        if isinstance(msg, TouchUpdate):
            self.client_id = msg.client_id
            self.touching = bool(msg.touches)
        elif isinstance(msg, ClearTouches):
            self.client_id = msg.client_id
            self.touching = False


@dataclass
class Relay:
    peers: dict[WebSocket, Peer] = field(default_factory=dict)

    def join(self, ws: WebSocket) -> Peer:
        peer = Peer(ws)
        self.peers[ws] = peer
        logger.info("peer joined (%d connected)", len(self.peers))
        return peer

    def leave(self, ws: WebSocket) -> Peer | None:
        peer = self.peers.pop(ws, None)
        if peer is not None:
            logger.info("peer %s left (%d connected)", peer.client_id or "?", len(self.peers))
        return peer

    def farewell_frame(self, peer: Peer) -> str | None:
        """The clear to send on behalf of a peer that vanished mid-touch, if any."""
        if peer.client_id is None or not peer.touching:
            return None
        # The client already reconnected on another socket; its state there is live.
        if any(p.client_id == peer.client_id for p in self.peers.values() if p is not peer):
            return None
        return encode_message(ClearTouches(client_id=peer.client_id))

    async def broadcast(self, data: str, exclude: WebSocket | None = None) -> None:
        """Forward a text frame verbatim to every peer except `exclude`."""
        dead: list[WebSocket] = []
        for ws in list(self.peers):
            if exclude is ws:
                continue
            try:
                await ws.send_text(data)
            except Exception:
                dead.append(ws)
        for ws in dead:
            self.leave(ws)
