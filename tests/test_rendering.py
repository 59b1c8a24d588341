import base64

from touchsync.client import ContactPoint, ParticipantState
from touchsync.client.rendering import render_frame, render_frame_png_b64


def test_local_and_remote_circles():
    local = [ContactPoint(1, 50, 50, "#ff0000")]
    remote = {
        "p": ParticipantState(touches=(ContactPoint(1, 20, 90, "#0000ff"),), color="#0000ff"),
        "q": ParticipantState(touches=(ContactPoint(1, 150, 20, ""),), color=""),
    }
    img = render_frame(local=local, remote=remote, size=(200, 120))

    assert img.size == (200, 120)
    assert img.getpixel((50, 50)) == (255, 0, 0, 255)
    assert img.getpixel((20, 90)) == (0, 0, 255, 255)
    assert img.getpixel((150, 20)) == (0, 255, 255, 255)
    assert img.getpixel((120, 100)) == (0, 0, 0, 255)


def test_offscreen_points_are_clipped():
    img = render_frame(local=[ContactPoint("mouse", -500, 5000, "#ff0000")], remote={}, size=(10, 10))
    assert img.getpixel((5, 5)) == (0, 0, 0, 255)


def test_png_b64():
    data = base64.b64decode(render_frame_png_b64(local=[], remote={}, size=(8, 8)))
    assert data.startswith(b"\x89PNG")
