from __future__ import annotations

import json
from typing import Annotated, Literal, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, TypeAdapter, ValidationError

from .constants import KNOWN_TYPES

# Touch identifiers are ints from the touch API, or "mouse" for the mouse contact.
ContactId: TypeAlias = Union[StrictInt, StrictStr]
Coord: TypeAlias = Union[StrictInt, StrictFloat]
HexColor: TypeAlias = Annotated[str, Field(pattern=r"^#[0-9a-fA-F]{6}$")]


class ProtocolError(ValueError):
    """A frame that claims to be a known message kind but does not parse as one."""


class TouchPoint(BaseModel):
    # Browser clients also send a per-touch color; it is redundant with the message color.
    model_config = ConfigDict(extra="ignore")

    id: ContactId
    x: Coord
    y: Coord


class TouchUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["touchUpdate"] = "touchUpdate"
    client_id: Annotated[str, Field(alias="clientId", min_length=1)]
    color: HexColor
    touches: list[TouchPoint]


class ClearTouches(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["clearTouches"] = "clearTouches"
    client_id: Annotated[str, Field(alias="clientId", min_length=1)]


InboundMsg: TypeAlias = Annotated[Union[TouchUpdate, ClearTouches], Field(discriminator="type")]
OutboundMsg: TypeAlias = Union[TouchUpdate, ClearTouches]

_inbound = TypeAdapter(InboundMsg)


def decode_message(raw: str | bytes) -> TouchUpdate | ClearTouches | None:
    """
    Parse one wire frame.

    Returns None for well-formed frames of a kind we do not know (newer peers),
    raises ProtocolError for anything else that does not parse.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        obj = json.loads(raw)
    except ValueError as e:
        raise ProtocolError(f"frame is not JSON: {e}") from e
    if not isinstance(obj, dict):
        raise ProtocolError(f"frame is not an object: {type(obj).__name__}")

    t = obj.get("type")
    if not isinstance(t, str):
        raise ProtocolError("frame has no string 'type'")
    if t not in KNOWN_TYPES:
        return None

    try:
        return _inbound.validate_python(obj)
    except ValidationError as e:
        raise ProtocolError(f"invalid {t} frame: {e.error_count()} error(s)") from e


def encode_message(msg: OutboundMsg) -> str:
    return json.dumps(msg.model_dump(by_alias=True), separators=(",", ":"), ensure_ascii=False)
