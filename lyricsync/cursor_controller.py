"""Owns the current display index and turns every change into one emission."""

import logging
import threading
from typing import List, Optional

from .display_sink import DisplaySink
from .models import IDLE_PLACEHOLDER, MSG_CODE_PLAIN_TEXT, PlaybackMode, SyncState, Timeline

logger = logging.getLogger(__name__)

class CursorController:
    """
    Single owner of the current index for a timeline or a list of chunks.

    Both the sync clock and manual gestures change the index through this
    class. Every mutation runs under `lock`, a re-entrant lock the clock
    also holds while it polls, so the two writers are serialized.
    """

    def __init__(self, sink: DisplaySink, msg_code: int = MSG_CODE_PLAIN_TEXT):
        """
        Initializes the CursorController.

        Args:
            sink: Display sink receiving the text at every new index.
            msg_code: Message code sent with each payload.
        """
        self.sink = sink
        self.msg_code = msg_code
        self.lock = threading.RLock()
        self.state = SyncState()
        self.mode: Optional[PlaybackMode] = None
        self._timeline: Timeline = []
        self._texts: List[str] = []

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def timeline(self) -> Timeline:
        return list(self._timeline)

    def __len__(self) -> int:
        return len(self._texts)

    def load_timeline(self, timeline: Timeline) -> None:
        """Replaces the content with a timeline; nothing is selected yet."""
        with self.lock:
            self._timeline = list(timeline)
            self._texts = [entry.text for entry in self._timeline]
            self.mode = PlaybackMode.TIMED
            self.state = SyncState()
            logger.debug(f"Loaded timeline with {len(self._texts)} entries.")

    def load_chunks(self, chunks: List[str]) -> None:
        """Replaces the content with plain text chunks; nothing is selected yet."""
        with self.lock:
            self._timeline = []
            self._texts = list(chunks)
            self.mode = PlaybackMode.MANUAL
            self.state = SyncState()
            logger.debug(f"Loaded {len(self._texts)} text chunks.")

    def clear(self) -> None:
        """Drops all content and resets the index to -1."""
        with self.lock:
            self._timeline = []
            self._texts = []
            self.mode = None
            self.state = SyncState()

    def begin_sync(self, start_instant: float) -> bool:
        """
        Marks the start of automatic sync and shows the first entry.

        Returns:
            True if there is something to show, False for an empty timeline.
        """
        with self.lock:
            self.state.start_instant = start_instant
            if not self._texts:
                self.state.current_index = -1
                return False
            self._move_to(0)
            return True

    def rebase(self, start_instant: float) -> None:
        with self.lock:
            self.state.start_instant = start_instant

    def sync_to(self, elapsed_ms: float) -> bool:
        """
        Advances past every entry whose offset has been reached.

        Several entries can be passed in one call when their offsets are
        closer together than the polling cadence; each of them is emitted
        in order.

        Args:
            elapsed_ms: Milliseconds elapsed since the start instant.

        Returns:
            True once the last entry is current (nothing left to wait for).
        """
        with self.lock:
            if self.mode is not PlaybackMode.TIMED or not self._timeline:
                return True
            last = len(self._timeline) - 1
            while (self.state.current_index < last
                   and elapsed_ms >= self._timeline[self.state.current_index + 1].offset_ms):
                self._move_to(self.state.current_index + 1)
            return self.state.current_index >= last

    def advance(self, delta: int) -> bool:
        """
        Moves the index one step forward (+1) or backward (-1).

        Moving before the first or past the last entry does nothing.

        Args:
            delta: +1 or -1.

        Returns:
            True if the index changed.

        Raises:
            ValueError: If delta is not +1 or -1.
        """
        if delta not in (-1, 1):
            raise ValueError(f"advance() takes +1 or -1, got {delta}")
        with self.lock:
            target = self.state.current_index + delta
            if target < 0 or target >= len(self._texts):
                logger.debug(f"Ignoring advance({delta:+d}) at index {self.state.current_index} of {len(self._texts)}.")
                return False
            self._move_to(target)
            return True

    def offset_at(self, index: int) -> int:
        """Offset of a timeline entry in milliseconds."""
        with self.lock:
            return self._timeline[index].offset_ms

    def current_text(self) -> Optional[str]:
        with self.lock:
            if self.state.current_index < 0:
                return None
            return self._texts[self.state.current_index]

    def display_text(self) -> str:
        """Text for a local preview: the current entry, or the idle placeholder."""
        text = self.current_text()
        return IDLE_PLACEHOLDER if text is None else text

    def snapshot(self) -> SyncState:
        with self.lock:
            return SyncState(self.state.start_instant, self.state.current_index)

    def _move_to(self, index: int) -> None:
        # Caller holds the lock
        self.state.current_index = index
        text = self._texts[index]
        logger.debug(f"Showing entry {index + 1}/{len(self._texts)}: {text!r}")
        self.sink.emit(self.msg_code, text.encode('utf-8'))
