from __future__ import annotations

import base64
import io
from collections.abc import Iterable, Mapping

from PIL import Image, ImageDraw

from .models import ContactPoint, ParticipantState

LOCAL_RADIUS = 35
REMOTE_RADIUS = 25
REMOTE_FALLBACK_COLOR = "cyan"


def render_frame(
    *,
    local: Iterable[ContactPoint],
    remote: Mapping[str, ParticipantState],
    size: tuple[int, int],
    background: str = "#000000",
) -> Image.Image:
    """
    Paint one frame: every contact as a filled circle.

    - **local**: this client's points, drawn larger with a white outline
    - **remote**: participant id -> state, drawn smaller with a faint outline
    - **size**: (width, height) in px; points outside the frame are clipped
    """
    img = Image.new("RGBA", size, background)
    draw = ImageDraw.Draw(img, "RGBA")

    def circle(x: float, y: float, r: int) -> list[float]:
        return [x - r, y - r, x + r, y + r]

    # Remote first so our own contacts stay on top.
    for state in remote.values():
        fill = state.color or REMOTE_FALLBACK_COLOR
        for t in state.touches:
            draw.ellipse(circle(t.x, t.y, REMOTE_RADIUS), fill=fill, outline=(255, 255, 255, 77), width=1)

    for t in local:
        draw.ellipse(circle(t.x, t.y, LOCAL_RADIUS), fill=t.color, outline="white", width=2)

    return img


def render_frame_png_b64(
    *,
    local: Iterable[ContactPoint],
    remote: Mapping[str, ParticipantState],
    size: tuple[int, int],
) -> str:
    """Same frame as a PNG (base64, no data-url prefix)."""
    img = render_frame(local=local, remote=remote, size=size)
    bio = io.BytesIO()
    img.save(bio, format="PNG", optimize=True)
    return base64.b64encode(bio.getvalue()).decode("ascii")
