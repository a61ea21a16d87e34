"""Orchestrates loading, timed playback and manual navigation."""

import logging
import time
from typing import Callable, Optional

from .config_loader import EngineSettings
from .cursor_controller import CursorController
from .display_sink import DisplaySink, FireAndForgetSink
from .exceptions import FileLoadError
from .file_source import FileSource
from .models import ApplicationState, LoadedFile, ManualOverridePolicy, PlaybackMode
from .sync_clock import SyncClock
from .text_wrapper import char_measure
from .timeline_parser import decode_content, parse_lrc, parse_plain_text
from .utils import file_mode_for

logger = logging.getLogger(__name__)

class Teleprompter:
    """
    Manages one display session from file pick to cancel.

    `run` and `cancel` are the start and cancel entry points; `advance`
    handles forward and backward gestures.
    """

    def __init__(
        self,
        settings: EngineSettings,
        sink: DisplaySink,
        file_source: FileSource,
        time_source: Callable[[], float] = time.monotonic,
        background: bool = True
    ):
        """
        Initializes the Teleprompter.

        Args:
            settings: Validated engine settings.
            sink: Display sink. It is wrapped so delivery failures are only logged.
            file_source: Where `run` obtains the file to display.
            time_source: Monotonic clock in seconds, shared with the SyncClock.
            background: Run the clock's polling task and sink dispatch on
                        background threads. Tests pass False and call tick().
        """
        self.settings = settings
        self.file_source = file_source
        self.background = background
        if isinstance(sink, FireAndForgetSink):
            self.sink = sink
        else:
            self.sink = FireAndForgetSink(sink, background=background and settings.fire_and_forget)
        self.controller = CursorController(self.sink, msg_code=settings.message_code)
        self.clock = SyncClock(self.controller, poll_interval=settings.poll_interval, time_source=time_source)
        self.state = ApplicationState.READY
        self.mode: Optional[PlaybackMode] = None
        self._measure = char_measure(settings.char_width)

    def run(self) -> ApplicationState:
        """
        Picks a file and starts displaying it.

        Any previous session is cleared first. A missing, unreadable or
        empty file returns the teleprompter to READY with nothing shown.

        Returns:
            The resulting application state.
        """
        self.state = ApplicationState.RUNNING
        self._reset()
        try:
            loaded = self.file_source.pick()
            if loaded is None:
                logger.debug("No file selected.")
                self.state = ApplicationState.READY
                return self.state
            content = decode_content(loaded.data)
        except (FileLoadError, OSError) as e:
            logger.debug(f"Error loading file: {e}")
            self.state = ApplicationState.READY
            return self.state

        mode = self._resolve_mode(loaded)
        if mode is PlaybackMode.TIMED:
            self._start_timed(loaded.name, content)
        else:
            self._start_manual(loaded.name, content)
        return self.state

    def advance(self, delta: int) -> bool:
        """
        Applies a forward (+1) or backward (-1) gesture.

        During a timed session the configured ManualOverridePolicy decides
        whether the clock keeps running, pauses or follows the new position.

        Returns:
            True if the displayed entry changed.
        """
        with self.controller.lock:
            changed = self.controller.advance(delta)
            if not changed or self.mode is not PlaybackMode.TIMED or not self.clock.is_active:
                return changed
            policy = self.settings.manual_override
            if policy is ManualOverridePolicy.PAUSE:
                logger.info("Manual navigation; pausing lyric sync.")
                self.clock.halt()
            elif policy is ManualOverridePolicy.RESYNC:
                offset_ms = self.controller.offset_at(self.controller.current_index)
                self.clock.resync(offset_ms, background=self.background)
            # CLOCK_WINS: the clock keeps polling against the shared index
        return changed

    def cancel(self) -> None:
        """Stops playback and clears everything loaded. Safe to call when idle."""
        self._reset()
        self.state = ApplicationState.READY
        logger.info("Teleprompter cancelled; ready to load.")

    def tick(self) -> bool:
        """Polls the clock once (for callers driving it without a background thread)."""
        return self.clock.tick()

    def display_text(self) -> str:
        return self.controller.display_text()

    def close(self) -> None:
        self.cancel()
        self.sink.close()

    def _reset(self) -> None:
        self.clock.stop()
        self.controller.clear()
        self.mode = None

    def _resolve_mode(self, loaded: LoadedFile) -> PlaybackMode:
        if self.settings.playback_mode is not PlaybackMode.AUTO:
            return self.settings.playback_mode
        return PlaybackMode(file_mode_for(loaded.name))

    def _start_timed(self, name: str, content: str) -> None:
        timeline = parse_lrc(content, self.settings.wrap_width, self.settings.max_lines, self._measure)
        if not timeline:
            logger.info(f"No timestamped lines in {name}; nothing to display.")
            self.state = ApplicationState.READY
            return
        self.mode = PlaybackMode.TIMED
        logger.info(f"Loaded {len(timeline)} timed lines from {name}.")
        self.clock.start(timeline, background=self.background)

    def _start_manual(self, name: str, content: str) -> None:
        chunks = parse_plain_text(content, self.settings.wrap_width, self.settings.max_lines, self._measure)
        if not chunks:
            logger.info(f"No text in {name}; nothing to display.")
            self.state = ApplicationState.READY
            return
        self.mode = PlaybackMode.MANUAL
        logger.info(f"Loaded {len(chunks)} text chunks from {name}.")
        self.controller.load_chunks(chunks)
        self.controller.advance(1)
