from __future__ import annotations

import logging
from collections.abc import Iterable

from touchsync.protocol import MOUSE_ID

from .models import ContactId
from .sync import TouchSync

logger = logging.getLogger(__name__)

TouchEvent = tuple[ContactId, float, float]  # (identifier, x, y)


class InputAdapter:
    """
    Maps host pointer events onto the sync engine.

    Touch events carry the changed touches only. The mouse is tracked as one
    extra contact with id "mouse" while its button is held.
    """

    def __init__(self, sync: TouchSync):
        self.sync = sync
        self.mouse_down_active = False

    def touch_start(self, changed: Iterable[TouchEvent]) -> None:
        changed = list(changed)
        for cid, x, y in changed:
            logger.debug("touch start: id %s at (%d, %d)", cid, round(x), round(y))
        self.sync.contacts_changed(changed)

    def touch_move(self, changed: Iterable[TouchEvent]) -> None:
        self.sync.contacts_changed(changed)

    def touch_end(self, ids: Iterable[ContactId]) -> None:
        ids = list(ids)
        logger.debug("touch end: ids %s", ids)
        self.sync.contacts_ended(ids)

    def touch_cancel(self, ids: Iterable[ContactId]) -> None:
        ids = list(ids)
        logger.debug("touch cancel: ids %s", ids)
        self.sync.contacts_ended(ids)

    def mouse_down(self, x: float, y: float) -> None:
        self.mouse_down_active = True
        logger.debug("mouse down at (%d, %d)", round(x), round(y))
        self.sync.contacts_changed([(MOUSE_ID, x, y)])

    def mouse_move(self, x: float, y: float) -> None:
        if self.mouse_down_active:
            self.sync.contacts_changed([(MOUSE_ID, x, y)])

    def mouse_up(self) -> None:
        if self.mouse_down_active:
            self.mouse_down_active = False
            logger.debug("mouse up")
            self.sync.contacts_ended([MOUSE_ID])

    def mouse_leave(self) -> None:
        # Leaving the canvas with the button held ends the drag.
        self.mouse_up()
