import pytest

from lyricsync.exceptions import FormattingError
from lyricsync.models import TimelineEntry
from lyricsync.timeline_formatter import TimelineFormatter
from lyricsync.utils import format_offset


def test_format_offset():
    assert format_offset(62003) == "01:02.003"
    assert format_offset(0) == "00:00.000"
    assert format_offset(75 * 60000 + 3250) == "75:03.250"
    assert format_offset(-5) == "00:00.000"


def test_render_timeline_blocks():
    timeline = [TimelineEntry(0, ""), TimelineEntry(1500, "line one\nline two")]
    rendered = TimelineFormatter().render_timeline(timeline)
    assert rendered == "[00:00.000]\n(blank)\n\n[00:01.500]\nline one\nline two\n"


def test_format_chunks_writes_file(tmp_path):
    output = tmp_path / "notes.preview.txt"
    TimelineFormatter().format_chunks(["a", "b c"], str(output))
    assert output.read_text(encoding="utf-8") == "#1\na\n\n#2\nb c\n"


def test_unwritable_output_raises(tmp_path):
    with pytest.raises(FormattingError):
        TimelineFormatter().format_timeline([TimelineEntry(0, "x")], str(tmp_path / "missing" / "out.txt"))
