from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .models import ContactPoint, ParticipantState


class RemoteTouchStore:
    """
    Latest known contacts of every other participant.

    A key is present only while that participant has at least one active
    contact; the active-user count is derived from presence alone.
    """

    def __init__(self) -> None:
        self._participants: dict[str, ParticipantState] = {}

    def apply_update(self, participant_id: str, touches: Iterable[ContactPoint], color: str) -> None:
        pts = tuple(touches)
        if not pts:
            # An empty update from a misbehaving sender means the same as a clear.
            self._participants.pop(participant_id, None)
            return
        self._participants[participant_id] = ParticipantState(touches=pts, color=color)

    def apply_clear(self, participant_id: str) -> ParticipantState | None:
        return self._participants.pop(participant_id, None)

    def get(self, participant_id: str) -> ParticipantState | None:
        return self._participants.get(participant_id)

    def count(self) -> int:
        return len(self._participants)

    def snapshot_all(self) -> Mapping[str, ParticipantState]:
        return MappingProxyType(dict(self._participants))

    def clear_all(self) -> None:
        self._participants.clear()
