from __future__ import annotations

import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .config import RelaySettings, get_settings
from .relay import Relay

logger = logging.getLogger(__name__)


def create_app(settings: RelaySettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI()
    relay = Relay()
    app.state.relay = relay

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "clients": len(relay.peers)}

    async def relay_ws(ws: WebSocket):
        await ws.accept()
        peer = relay.join(ws)
        try:
            while True:
                frame = await ws.receive()
                if frame["type"] == "websocket.disconnect":
                    break
                raw = frame.get("text")
                if raw is None:
                    data = frame.get("bytes")
                    if data is None:
                        continue
                    # Binary frames are relayed as text, like the client transport reads them.
                    raw = data.decode("utf-8", errors="replace")
                peer.observe(raw)
                if settings.debug_log_msgs:
                    logger.info("[ws] in from=%s %s", getattr(ws.client, "host", None), raw)
                # Never echoed back to the sender.
                await relay.broadcast(raw, exclude=ws)
        except WebSocketDisconnect:
            pass
        finally:
            relay.leave(ws)
            farewell = relay.farewell_frame(peer) if settings.clear_on_disconnect else None
            if farewell is not None:
                logger.info("synthesizing clear for %s", peer.client_id)
                await relay.broadcast(farewell)

    # Browser pages connect to the host root; headless clients use /ws.
    app.add_api_websocket_route("/ws", relay_ws)
    app.add_api_websocket_route("/", relay_ws)
    return app


app = create_app()
