import pytest

from lyricsync.cursor_controller import CursorController
from lyricsync.models import IDLE_PLACEHOLDER, MSG_CODE_PLAIN_TEXT, PlaybackMode, TimelineEntry


def three_entries():
    return [TimelineEntry(0, "A"), TimelineEntry(500, "B"), TimelineEntry(1200, "C")]


def test_initial_state_is_idle(sink):
    controller = CursorController(sink)
    assert controller.current_index == -1
    assert controller.current_text() is None
    assert controller.display_text() == IDLE_PLACEHOLDER
    assert len(controller) == 0


def test_advance_on_empty_content_is_noop(sink):
    controller = CursorController(sink)
    controller.load_timeline([])
    assert controller.advance(1) is False
    assert controller.advance(-1) is False
    assert controller.current_index == -1
    assert sink.messages == []


def test_manual_clamp_at_both_ends(sink):
    controller = CursorController(sink)
    controller.load_timeline(three_entries())
    assert controller.advance(1) is True
    assert controller.current_index == 0
    assert controller.advance(-1) is False
    assert controller.current_index == 0
    controller.advance(1)
    controller.advance(1)
    assert controller.current_index == 2
    assert controller.advance(1) is False
    assert controller.current_index == 2
    assert sink.texts == ["A", "B", "C"]


def test_backward_from_idle_does_not_select(sink):
    controller = CursorController(sink)
    controller.load_chunks(["one", "two"])
    assert controller.advance(-1) is False
    assert controller.current_index == -1


def test_each_change_emits_once_with_message_code(sink):
    controller = CursorController(sink)
    controller.load_chunks(["héllo\nworld"])
    controller.advance(1)
    assert sink.messages == [(MSG_CODE_PLAIN_TEXT, "héllo\nworld".encode("utf-8"))]


def test_custom_message_code(sink):
    controller = CursorController(sink, msg_code=0x0b)
    controller.load_chunks(["x"])
    controller.advance(1)
    assert sink.messages[0][0] == 0x0b


@pytest.mark.parametrize("delta", [0, 2, -3])
def test_advance_rejects_other_deltas(sink, delta):
    controller = CursorController(sink)
    controller.load_chunks(["x", "y"])
    with pytest.raises(ValueError):
        controller.advance(delta)


def test_sync_to_emits_every_passed_entry(sink):
    controller = CursorController(sink)
    controller.load_timeline([TimelineEntry(0, "A"), TimelineEntry(100, "B"),
                              TimelineEntry(200, "C"), TimelineEntry(300, "D")])
    controller.begin_sync(start_instant=0.0)
    assert controller.sync_to(250) is False
    assert controller.current_index == 2
    assert sink.texts == ["A", "B", "C"]
    assert controller.sync_to(300) is True
    assert sink.texts == ["A", "B", "C", "D"]


def test_sync_to_without_timeline_is_terminal(sink):
    controller = CursorController(sink)
    controller.load_chunks(["x"])
    assert controller.sync_to(10_000) is True
    assert sink.messages == []


def test_clear_resets_everything(sink):
    controller = CursorController(sink)
    controller.load_timeline(three_entries())
    controller.begin_sync(start_instant=5.0)
    controller.clear()
    state = controller.snapshot()
    assert state.current_index == -1
    assert state.start_instant is None
    assert controller.mode is None
    assert controller.timeline == []


def test_load_sets_mode(sink):
    controller = CursorController(sink)
    controller.load_timeline(three_entries())
    assert controller.mode is PlaybackMode.TIMED
    controller.load_chunks(["x"])
    assert controller.mode is PlaybackMode.MANUAL
    assert controller.timeline == []
