from __future__ import annotations

from .models import ContactId, ContactPoint


class LocalTouchTracker:
    """This client's active contacts, keyed by contact id, all tagged with our color."""

    def __init__(self, color: str):
        self.color = color
        self._touches: dict[ContactId, ContactPoint] = {}
        self.dirty = False

    def upsert(self, contact_id: ContactId, x: float, y: float) -> ContactPoint:
        # Coordinates are not clamped: fast drags legitimately leave the canvas.
        pt = ContactPoint(id=contact_id, x=x, y=y, color=self.color)
        self._touches[contact_id] = pt
        self.dirty = True
        return pt

    def remove(self, contact_id: ContactId) -> bool:
        if self._touches.pop(contact_id, None) is None:
            return False
        self.dirty = True
        return True

    def snapshot(self) -> list[ContactPoint]:
        return list(self._touches.values())

    def is_active(self) -> bool:
        return bool(self._touches)

    def mark_clean(self) -> None:
        self.dirty = False

    def __len__(self) -> int:
        return len(self._touches)

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._touches
