from lyricsync.cursor_controller import CursorController
from lyricsync.models import TimelineEntry
from lyricsync.sync_clock import SyncClock


def three_entries():
    return [TimelineEntry(0, "A"), TimelineEntry(500, "B"), TimelineEntry(1200, "C")]


def make_clock(sink, fake_clock, interval=0.1):
    controller = CursorController(sink)
    return controller, SyncClock(controller, poll_interval=interval, time_source=fake_clock)


def test_start_shows_first_entry_and_records_start(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    clock.start(three_entries(), background=False)
    assert controller.current_index == 0
    assert controller.snapshot().start_instant == fake_clock.now
    assert sink.texts == ["A"]
    assert clock.is_running


def test_auto_advance_and_terminal_stop(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    clock.start(three_entries(), background=False)

    fake_clock.advance_ms(600)
    assert clock.tick() is True
    assert controller.current_index == 1

    fake_clock.advance_ms(700)
    assert clock.tick() is False
    assert controller.current_index == 2
    assert not clock.is_running
    assert clock.is_active

    fake_clock.advance_ms(5000)
    assert clock.tick() is False
    assert sink.texts == ["A", "B", "C"]


def test_tick_before_next_offset_changes_nothing(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    clock.start(three_entries(), background=False)
    fake_clock.advance_ms(499)
    assert clock.tick() is True
    assert controller.current_index == 0
    assert sink.texts == ["A"]


def test_empty_timeline_stays_idle(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    session = clock.start([], background=True)
    assert controller.current_index == -1
    assert sink.messages == []
    assert not session.is_polling
    assert clock.tick() is False


def test_single_entry_timeline_is_terminal_at_once(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    session = clock.start([TimelineEntry(0, "only")], background=True)
    assert sink.texts == ["only"]
    assert session.finished
    assert not session.is_polling


def test_stop_prevents_further_emissions(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    clock.start(three_entries(), background=False)
    clock.stop()
    clock.stop()
    fake_clock.advance_ms(2000)
    assert clock.tick() is False
    assert sink.texts == ["A"]
    assert not clock.is_active


def test_resync_reanchors_elapsed_time(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    clock.start(three_entries(), background=False)
    fake_clock.advance_ms(1300)
    clock.tick()
    assert controller.current_index == 2

    controller.advance(-1)
    clock.resync(controller.offset_at(1), background=False)
    assert clock.is_running
    assert clock.tick() is True
    assert controller.current_index == 1

    fake_clock.advance_ms(700)
    assert clock.tick() is False
    assert sink.texts == ["A", "B", "C", "B", "C"]


def test_background_polling_reaches_last_entry(sink):
    controller = CursorController(sink)
    clock = SyncClock(controller, poll_interval=0.005)
    session = clock.start([TimelineEntry(0, "A"), TimelineEntry(20, "B"), TimelineEntry(40, "C")])
    session.thread.join(timeout=5)
    assert not session.is_polling
    assert session.finished
    assert sink.texts == ["A", "B", "C"]


def test_stop_joins_background_thread(sink):
    controller = CursorController(sink)
    clock = SyncClock(controller, poll_interval=0.005)
    session = clock.start([TimelineEntry(0, "A"), TimelineEntry(60_000, "B")])
    assert session.is_polling
    clock.stop()
    assert not session.is_polling
    assert sink.texts == ["A"]


def test_restart_replaces_previous_session(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    first = clock.start(three_entries(), background=False)
    second = clock.start([TimelineEntry(0, "X"), TimelineEntry(100, "Y")], background=False)
    assert first.stopped
    assert clock.session is second
    fake_clock.advance_ms(150)
    clock.tick()
    assert sink.texts == ["A", "X", "Y"]


def test_one_tick_over_close_offsets_emits_each_line(sink, fake_clock):
    controller, clock = make_clock(sink, fake_clock)
    clock.start([TimelineEntry(0, "A"), TimelineEntry(30, "B"), TimelineEntry(60, "C"),
                 TimelineEntry(5000, "D")], background=False)
    fake_clock.advance_ms(100)
    assert clock.tick() is True
    assert controller.current_index == 2
    assert sink.texts == ["A", "B", "C"]
