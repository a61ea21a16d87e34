"""Greedy word wrapping to a fixed width budget and line count."""

from typing import Callable, Optional

Measure = Callable[[str], int]

# Width budget of the display in pixels, and lines per screen
DEFAULT_WRAP_WIDTH = 640
DEFAULT_MAX_LINES = 4

# Approximate advance widths in pixels of the display's proportional font
DEFAULT_GLYPH_WIDTH = 20
_GLYPH_WIDTH_GROUPS = {
    8: "'.,:;!|`",
    10: " iljI",
    14: "frt()[]{}-\"/",
    23: "ABCDEFGHJKLNOPQRSTUVXYZ&%#",
    26: "mwMW@",
}
GLYPH_WIDTHS = {ch: width for width, chars in _GLYPH_WIDTH_GROUPS.items() for ch in chars}


def text_width(text: str) -> int:
    """Pixel width of `text` using the glyph width table; unknown glyphs get the default width."""
    return sum(GLYPH_WIDTHS.get(ch, DEFAULT_GLYPH_WIDTH) for ch in text)


def char_measure(char_width: Optional[int] = None) -> Measure:
    """
    Returns the width measure for a configured character width.

    None selects the proportional glyph table (`text_width`). An integer
    charges that many units per character, so 1 makes the budget a plain
    character count.
    """
    if char_width is None:
        return text_width
    if char_width == 1:
        return len
    return lambda s: len(s) * char_width


def wrap_text(text: str, max_width: int = DEFAULT_WRAP_WIDTH, max_lines: int = DEFAULT_MAX_LINES,
              measure: Measure = text_width) -> str:
    """
    Wraps text onto at most `max_lines` lines of at most `max_width` units.

    Words are packed greedily. A word wider than the budget gets a line of
    its own and is never split. Words that do not fit once `max_lines`
    lines are full are dropped without an ellipsis.

    Args:
        text: The text to wrap. Any run of whitespace separates words.
        max_width: Width budget per line, in units of `measure`.
        max_lines: Maximum number of lines to return.
        measure: Function returning the width of a string.

    Returns:
        The wrapped lines joined with newlines, or "" for empty input.
    """
    words = text.split()
    if not words or max_lines <= 0:
        return ""

    lines = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if not current or measure(candidate) <= max_width:
            current = candidate
            continue
        lines.append(current)
        if len(lines) >= max_lines:
            current = ""
            break
        current = word

    if current:
        lines.append(current)
    return "\n".join(lines)
