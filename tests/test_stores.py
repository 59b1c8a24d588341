import random
import re

import pytest

from touchsync.client import ContactPoint, Identity, LocalTouchTracker, RemoteTouchStore


def test_identity_shape():
    ident = Identity.generate()
    assert re.fullmatch(r"[0-9a-f]{12}", ident.client_id)
    assert re.fullmatch(r"#[0-9a-f]{6}", ident.color)
    assert ident.short_id == ident.client_id[:4]
    assert Identity.generate().client_id != ident.client_id


def test_identity_color_is_reproducible_with_seeded_rng():
    a = Identity.generate(random.Random(7))
    b = Identity.generate(random.Random(7))
    assert a.color == b.color


def test_identity_color_is_zero_padded():
    class Low(random.Random):
        def randrange(self, *args, **kwargs):
            return 0x0F0F0F

    assert Identity.generate(Low()).color == "#0f0f0f"


@pytest.mark.parametrize("seed", range(5))
def test_tracker_matches_replayed_model(seed):
    rng = random.Random(seed)
    tracker = LocalTouchTracker("#123456")
    model: dict = {}
    for _ in range(200):
        cid = rng.choice([0, 1, 2, 3, "mouse"])
        if rng.random() < 0.6:
            x, y = rng.uniform(-50, 2000), rng.uniform(-50, 2000)
            tracker.upsert(cid, x, y)
            model[cid] = ContactPoint(cid, x, y, "#123456")
        else:
            assert tracker.remove(cid) == (cid in model)
            model.pop(cid, None)
        assert tracker.is_active() == bool(model)

    assert sorted(tracker.snapshot(), key=repr) == sorted(model.values(), key=repr)


def test_tracker_tags_points_with_client_color_and_tracks_dirty():
    tracker = LocalTouchTracker("#abcdef")
    assert not tracker.dirty
    pt = tracker.upsert(5, 100, 100)
    assert pt.color == "#abcdef"
    assert tracker.dirty and 5 in tracker and len(tracker) == 1
    tracker.mark_clean()
    assert not tracker.remove(6)
    assert not tracker.dirty
    assert tracker.remove(5)
    assert tracker.dirty and not tracker.is_active()


def _pts(color, *coords):
    return [ContactPoint(i + 1, x, y, color) for i, (x, y) in enumerate(coords)]


def test_scenario_update_then_clear():
    store = RemoteTouchStore()
    store.apply_update("abcd1234", _pts("#ff0000", (10, 20), (30, 40)), "#ff0000")
    assert store.count() == 1
    assert len(store.snapshot_all()["abcd1234"].touches) == 2

    store.apply_clear("abcd1234")
    assert store.count() == 0
    assert "abcd1234" not in store.snapshot_all()


def test_update_is_idempotent_and_replaces_wholesale():
    store = RemoteTouchStore()
    store.apply_update("p", _pts("#ff0000", (1, 1), (2, 2)), "#ff0000")
    store.apply_update("p", _pts("#00ff00", (5, 5)), "#00ff00")
    once = dict(store.snapshot_all())
    store.apply_update("p", _pts("#00ff00", (5, 5)), "#00ff00")
    assert dict(store.snapshot_all()) == once
    assert store.get("p").color == "#00ff00"
    assert len(store.get("p").touches) == 1


def test_empty_update_removes_participant():
    store = RemoteTouchStore()
    store.apply_update("p", _pts("#ff0000", (1, 1)), "#ff0000")
    store.apply_update("p", [], "#ff0000")
    assert store.get("p") is None
    store.apply_update("q", [], "#ff0000")
    assert store.count() == 0


def test_clear_is_idempotent():
    store = RemoteTouchStore()
    assert store.apply_clear("never-seen") is None
    store.apply_update("p", _pts("#ff0000", (1, 1)), "#ff0000")
    assert store.apply_clear("p").color == "#ff0000"
    assert store.apply_clear("p") is None
    assert store.count() == 0


def test_snapshot_is_read_only():
    store = RemoteTouchStore()
    store.apply_update("p", _pts("#ff0000", (1, 1)), "#ff0000")
    snap = store.snapshot_all()
    with pytest.raises(TypeError):
        snap["q"] = None
    store.clear_all()
    assert "p" in snap and store.count() == 0
