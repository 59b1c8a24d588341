from .connection import ConnectionManager, ConnectionState
from .context import TouchSyncClient
from .identity import Identity
from .inputs import InputAdapter
from .local_touches import LocalTouchTracker
from .models import ContactPoint, ParticipantState, Status
from .remote_touches import RemoteTouchStore
from .sync import TouchSync
from .transport import WebSocketTransport, ws_url_for

__all__ = [
    "ConnectionManager",
    "ConnectionState",
    "ContactPoint",
    "Identity",
    "InputAdapter",
    "LocalTouchTracker",
    "ParticipantState",
    "RemoteTouchStore",
    "Status",
    "TouchSync",
    "TouchSyncClient",
    "WebSocketTransport",
    "ws_url_for",
]
