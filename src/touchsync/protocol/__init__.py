from .constants import KNOWN_TYPES, MOUSE_ID, T_CLEAR_TOUCHES, T_TOUCH_UPDATE
from .messages import (
    ClearTouches,
    InboundMsg,
    OutboundMsg,
    ProtocolError,
    TouchPoint,
    TouchUpdate,
    decode_message,
    encode_message,
)

__all__ = [
    "KNOWN_TYPES",
    "MOUSE_ID",
    "T_CLEAR_TOUCHES",
    "T_TOUCH_UPDATE",
    "ClearTouches",
    "InboundMsg",
    "OutboundMsg",
    "ProtocolError",
    "TouchPoint",
    "TouchUpdate",
    "decode_message",
    "encode_message",
]
