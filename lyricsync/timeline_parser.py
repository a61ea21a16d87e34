"""Parses timestamped lyrics and plain text into display-ready entries."""

import logging
import re
from typing import List

from .exceptions import FileLoadError
from .models import Timeline, TimelineEntry
from .text_wrapper import DEFAULT_MAX_LINES, DEFAULT_WRAP_WIDTH, Measure, text_width, wrap_text

logger = logging.getLogger(__name__)

# [MM:SS.fff]text - the fraction group is taken as milliseconds verbatim
LRC_LINE_PATTERN = re.compile(r"\[(\d+):(\d+)\.(\d+)\](.*)")


def decode_content(data: bytes) -> str:
    """
    Decodes raw file bytes as UTF-8, dropping a leading byte order mark.

    Raises:
        FileLoadError: If the bytes are not valid UTF-8.
    """
    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise FileLoadError(f"File is not valid UTF-8 text: {e}") from e


def parse_offset_ms(minutes: str, seconds: str, fraction: str) -> int:
    """
    Converts the captured timestamp groups to a millisecond offset.

    The fraction is read literally as milliseconds, so "03" is 3 ms and
    not 30 ms. Existing lyric files for the display are timed against
    this reading.
    """
    return int(minutes) * 60000 + int(seconds) * 1000 + int(fraction)


def parse_lrc(content: str, max_width: int = DEFAULT_WRAP_WIDTH, max_lines: int = DEFAULT_MAX_LINES,
              measure: Measure = text_width) -> Timeline:
    """
    Parses LRC-style content into a timeline ordered by offset.

    Each line is searched for a `[MM:SS.fff]` tag; the remainder of the
    line after the tag is stripped and wrapped. Lines without a tag are
    skipped. Entries sharing an offset keep their file order.

    Args:
        content: Decoded file content.
        max_width: Wrap width budget.
        max_lines: Wrap line budget.
        measure: Width function handed to the wrapper.

    Returns:
        The sorted timeline. Empty when no line carried a timestamp.
    """
    entries = []
    skipped = 0
    for line in content.split('\n'):
        match = LRC_LINE_PATTERN.search(line)
        if match is None:
            skipped += 1
            continue
        minutes, seconds, fraction, text = match.groups()
        entries.append(TimelineEntry(
            offset_ms=parse_offset_ms(minutes, seconds, fraction),
            text=wrap_text(text.strip(), max_width, max_lines, measure),
        ))

    # list.sort is stable, so equal offsets stay in file order
    entries.sort(key=lambda entry: entry.offset_ms)
    logger.debug(f"Parsed {len(entries)} timed lines, skipped {skipped} untimed lines.")
    return entries


def parse_plain_text(content: str, max_width: int = DEFAULT_WRAP_WIDTH, max_lines: int = DEFAULT_MAX_LINES,
                     measure: Measure = text_width) -> List[str]:
    """Splits plain text on newlines and wraps every non-blank segment on its own."""
    chunks = []
    for segment in content.split('\n'):
        segment = segment.strip()
        if not segment:
            continue
        chunks.append(wrap_text(segment, max_width, max_lines, measure))
    logger.debug(f"Split plain text into {len(chunks)} chunks.")
    return chunks
