import os

import pytest

from lyricsync.config_loader import EngineSettings
from lyricsync.exceptions import FileLoadError
from lyricsync.timeline_formatter import TimelineFormatter
from main_batch import find_lyric_files, preview_file


def test_find_lyric_files_sorted_and_filtered(tmp_path):
    for name in ["b.lrc", "a.TXT", "c.mp3", "d.lrc"]:
        (tmp_path / name).write_text("x", encoding="utf-8")
    (tmp_path / "sub.lrc").mkdir()
    found = find_lyric_files(str(tmp_path))
    assert [os.path.basename(path) for path in found] == ["a.TXT", "b.lrc", "d.lrc"]


def test_find_lyric_files_rejects_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_lyric_files(str(tmp_path / "nope"))


def test_preview_timed_file(tmp_path):
    source = tmp_path / "song.lrc"
    source.write_text("[00:02.00]second\n[00:01.00]first\nuntimed\n", encoding="utf-8")
    count = preview_file(str(source), str(tmp_path), EngineSettings(), TimelineFormatter())
    assert count == 2
    preview = (tmp_path / "song.preview.txt").read_text(encoding="utf-8")
    assert preview == "[00:01.000]\nfirst\n\n[00:02.000]\nsecond\n"


def test_preview_plain_text_file(tmp_path):
    source = tmp_path / "notes.txt"
    source.write_text("alpha beta gamma\n", encoding="utf-8")
    settings = EngineSettings(wrap_width=10, char_width=1)
    assert preview_file(str(source), str(tmp_path), settings, TimelineFormatter()) == 1
    assert (tmp_path / "notes.preview.txt").read_text(encoding="utf-8") == "#1\nalpha beta\ngamma\n"


def test_preview_rejects_invalid_utf8(tmp_path):
    source = tmp_path / "broken.lrc"
    source.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(FileLoadError):
        preview_file(str(source), str(tmp_path), EngineSettings(), TimelineFormatter())
