"""Writes parsed timelines and text chunks to human-readable preview files."""

import logging
import os
from typing import List

from .exceptions import FormattingError
from .models import Timeline
from .utils import format_offset

logger = logging.getLogger(__name__)

class TimelineFormatter:
    """Renders exactly what the display would receive, one block per entry."""

    def render_timeline(self, timeline: Timeline) -> str:
        """
        Renders a timeline as `[MM:SS.mmm]` headers followed by the wrapped text.

        Entries with empty text (instrumental breaks) are shown as "(blank)".
        """
        blocks = []
        for entry in timeline:
            text = entry.text or "(blank)"
            blocks.append(f"[{format_offset(entry.offset_ms)}]\n{text}\n")
        return "\n".join(blocks)

    def render_chunks(self, chunks: List[str]) -> str:
        return "\n".join(f"#{i}\n{chunk}\n" for i, chunk in enumerate(chunks, start=1))

    def format_timeline(self, timeline: Timeline, output_path: str) -> None:
        """
        Writes a timeline preview file.

        Args:
            timeline: Parsed entries.
            output_path: Path of the preview file to write.

        Raises:
            FormattingError: If the file cannot be written.
        """
        logger.info(f"Writing timeline preview ({len(timeline)} entries): {output_path}")
        self._write(self.render_timeline(timeline), output_path)

    def format_chunks(self, chunks: List[str], output_path: str) -> None:
        """Writes a numbered preview of plain text chunks. Raises FormattingError on write failure."""
        logger.info(f"Writing chunk preview ({len(chunks)} chunks): {output_path}")
        self._write(self.render_chunks(chunks), output_path)

    def _write(self, content: str, output_path: str) -> None:
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write preview to {output_path}: {e}", exc_info=True)
            raise FormattingError(f"Could not write preview file {os.path.basename(output_path)}: {e}") from e
