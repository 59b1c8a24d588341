from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from touchsync.protocol import (
    ClearTouches,
    ProtocolError,
    TouchPoint,
    TouchUpdate,
    decode_message,
    encode_message,
)

from .connection import ConnectionManager, ConnectionState
from .identity import Identity
from .local_touches import LocalTouchTracker
from .models import ContactId, ContactPoint, Status
from .remote_touches import RemoteTouchStore

logger = logging.getLogger(__name__)

StatusListener = Callable[[Status], None]


class TouchSync:
    """
    Keeps local and remote touch state consistent over the connection.

    Every message carries the sender's complete contact set, so a dropped or
    late frame is repaired by the next one. Outgoing frames go through
    ConnectionManager.send and are dropped while not connected.
    """

    def __init__(
        self,
        identity: Identity,
        local: LocalTouchTracker,
        remote: RemoteTouchStore,
        connection: ConnectionManager,
    ):
        self.identity = identity
        self.local = local
        self.remote = remote
        self.connection = connection
        self._status_listeners: list[StatusListener] = []
        # True while peers last received a non-empty update from us.
        self._announced = False

        connection.add_message_listener(self.handle_frame)
        connection.add_state_listener(self._on_connection_state)

    def add_status_listener(self, fn: StatusListener) -> None:
        self._status_listeners.append(fn)

    def active_count(self) -> int:
        return self.remote.count() + (1 if self.local.is_active() else 0)

    def status(self) -> Status:
        return Status(
            connection=self.connection.state.label,
            active_count=self.active_count(),
            color=self.identity.color,
            client_id=self.identity.client_id,
        )

    # local -> wire

    def contacts_changed(self, points: Iterable[tuple[ContactId, float, float]]) -> None:
        """Contacts started or moved: upsert them all, then send one full update."""
        changed = 0
        for contact_id, x, y in points:
            self.local.upsert(contact_id, x, y)
            changed += 1
        if not changed:
            return
        self._send_update()
        self._refresh()

    def contacts_ended(self, contact_ids: Iterable[ContactId]) -> None:
        """Contacts lifted or cancelled. The last one out sends a clear instead of an update."""
        was_active = self.local.is_active()
        removed = [cid for cid in contact_ids if self.local.remove(cid)]
        if not removed:
            return
        if self.local.is_active():
            self._send_update()
        elif was_active:
            self._send_clear()
        self._refresh()

    def _send_update(self) -> None:
        msg = TouchUpdate(
            client_id=self.identity.client_id,
            color=self.identity.color,
            touches=[TouchPoint(id=p.id, x=p.x, y=p.y) for p in self.local.snapshot()],
        )
        if self.connection.send(encode_message(msg)):
            self.local.mark_clean()
            self._announced = True

    def _send_clear(self) -> None:
        if self.connection.send(encode_message(ClearTouches(client_id=self.identity.client_id))):
            self.local.mark_clean()
            self._announced = False

    # wire -> local

    def handle_frame(self, raw: str) -> None:
        try:
            msg = decode_message(raw)
        except ProtocolError as e:
            logger.warning("discarding frame: %s", e)
            return
        if msg is None:
            logger.debug("ignoring frame of unknown kind")
            return
        if msg.client_id == self.identity.client_id:
            return

        if isinstance(msg, TouchUpdate):
            touches = [ContactPoint(id=t.id, x=t.x, y=t.y, color=msg.color) for t in msg.touches]
            self.remote.apply_update(msg.client_id, touches, msg.color)
            logger.info("update from user %s: %d touch(es)", msg.client_id[:4], len(touches))
        else:
            self.remote.apply_clear(msg.client_id)
            logger.info("user %s cleared touches", msg.client_id[:4])
        self._refresh()

    # status

    def _on_connection_state(self, old: ConnectionState, new: ConnectionState) -> None:
        if new is ConnectionState.OPEN:
            # Peers may have missed frames dropped while we were offline.
            if self.local.is_active():
                self._send_update()
            elif self._announced:
                self._send_clear()
        self._refresh()

    def _refresh(self) -> None:
        status = self.status()
        for fn in list(self._status_listeners):
            try:
                fn(status)
            except Exception:
                logger.exception("status listener failed")
