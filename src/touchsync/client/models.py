from __future__ import annotations

from dataclasses import dataclass
from typing import Union

ContactId = Union[int, str]


@dataclass(frozen=True)
class ContactPoint:
    id: ContactId
    x: float
    y: float
    color: str


@dataclass(frozen=True)
class ParticipantState:
    # Never constructed with empty touches; see RemoteTouchStore.apply_update.
    touches: tuple[ContactPoint, ...]
    color: str


@dataclass(frozen=True)
class Status:
    """What the presentation layer shows: connection label, active users, our color."""

    connection: str
    active_count: int
    color: str
    client_id: str
