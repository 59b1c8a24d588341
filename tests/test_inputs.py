from touchsync.protocol import MOUSE_ID, ClearTouches, TouchUpdate, decode_message


def kinds(transport):
    return [type(decode_message(raw)) for raw in transport.sent]


def test_mouse_drag_lifecycle(online, transport):
    online.inputs.mouse_move(5, 5)
    assert transport.sent == []

    online.inputs.mouse_down(10, 10)
    online.inputs.mouse_move(12, 14)
    online.inputs.mouse_up()
    online.inputs.mouse_up()

    assert kinds(transport) == [TouchUpdate, TouchUpdate, ClearTouches]
    last = decode_message(transport.sent[1])
    assert [(t.id, t.x, t.y) for t in last.touches] == [(MOUSE_ID, 12, 14)]
    assert not online.inputs.mouse_down_active


def test_mouse_leave_only_ends_a_pressed_drag(online, transport):
    online.inputs.mouse_leave()
    assert transport.sent == []

    online.inputs.mouse_down(1, 1)
    online.inputs.mouse_leave()
    assert kinds(transport) == [TouchUpdate, ClearTouches]


def test_multi_touch_batches_one_update_per_event(online, transport):
    online.inputs.touch_start([(0, 1, 1), (1, 2, 2)])
    assert len(transport.sent) == 1
    assert len(decode_message(transport.sent[0]).touches) == 2

    online.inputs.touch_move([(1, 3, 3)])
    online.inputs.touch_end([0])
    online.inputs.touch_cancel([1])

    assert kinds(transport) == [TouchUpdate, TouchUpdate, TouchUpdate, ClearTouches]
    assert [t.id for t in decode_message(transport.sent[2]).touches] == [1]


def test_mouse_and_touch_share_one_contact_set(online, transport):
    online.inputs.touch_start([(0, 1, 1)])
    online.inputs.mouse_down(50, 50)
    online.inputs.touch_end([0])
    # The mouse is still down, so this is an update, not a clear.
    assert kinds(transport)[-1] is TouchUpdate
    assert online.sync.active_count() == 1
