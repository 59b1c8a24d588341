from __future__ import annotations

import random
import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Who this client is on the wire: an opaque id plus a display color."""

    client_id: str
    color: str

    @property
    def short_id(self) -> str:
        return self.client_id[:4]

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> Identity:
        # 48 random bits: collisions are negligible for thousands of concurrent clients.
        client_id = uuid.uuid4().hex[:12]
        r = rng or random
        color = f"#{r.randrange(0x1000000):06x}"
        return cls(client_id=client_id, color=color)
