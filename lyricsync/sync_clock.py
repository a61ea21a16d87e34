"""Drives the cursor from elapsed wall-clock time since playback started."""

import logging
import threading
import time
from typing import Callable, Optional

from .cursor_controller import CursorController
from .models import Timeline

logger = logging.getLogger(__name__)

class ClockSession:
    """Handle for one playback session's polling task."""

    def __init__(self):
        self.stop_event = threading.Event()
        self.stopped = False
        self.finished = False
        self.thread: Optional[threading.Thread] = None

    @property
    def is_polling(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        if self.thread is not None and self.thread is not threading.current_thread():
            self.thread.join(timeout)


class SyncClock:
    """
    Advances a CursorController along its timeline as time passes.

    The clock polls on a fixed cadence from a background thread and stops
    by itself once the last entry is current, or when stop() is called.
    The elapsed time is assumed to equal the song position; nothing is
    synchronized to actual audio.
    """

    def __init__(self, controller: CursorController, poll_interval: float = 0.1,
                 time_source: Callable[[], float] = time.monotonic):
        """
        Initializes the SyncClock.

        Args:
            controller: The cursor to drive. Its lock serializes clock ticks
                        with manual gestures.
            poll_interval: Polling cadence in seconds.
            time_source: Monotonic clock returning seconds.
        """
        self.controller = controller
        self.poll_interval = poll_interval
        self.time_source = time_source
        self.session: Optional[ClockSession] = None

    @property
    def is_running(self) -> bool:
        """True while a session is active and has not reached its last entry."""
        session = self.session
        return session is not None and not session.stopped and not session.finished

    @property
    def is_active(self) -> bool:
        """True from start() until stop(), including after the last entry."""
        return self.session is not None and not self.session.stopped

    def start(self, timeline: Timeline, background: bool = True) -> ClockSession:
        """
        Starts a new playback session over `timeline`.

        The first entry is shown immediately. An empty timeline leaves the
        controller idle at index -1 and starts no polling.

        Args:
            timeline: Entries sorted by offset.
            background: Poll from a daemon thread. With False the caller
                        drives the session through tick().

        Returns:
            The new session handle.
        """
        self.stop()
        session = ClockSession()
        with self.controller.lock:
            self.controller.load_timeline(timeline)
            self.session = session
            if not self.controller.begin_sync(self.time_source()):
                session.finished = True
                logger.info("Timeline is empty; staying idle.")
                return session
            if len(timeline) == 1:
                session.finished = True
        logger.info(f"Started lyric sync over {len(timeline)} entries.")
        if background and not session.finished:
            self._spawn(session)
        return session

    def tick(self) -> bool:
        """
        Polls once: moves the cursor to the entry matching the elapsed time.

        Returns:
            True if polling should continue, False once stopped or at the
            last entry.
        """
        with self.controller.lock:
            session = self.session
            if session is None or session.stopped or session.finished:
                return False
            start_instant = self.controller.state.start_instant
            if start_instant is None:
                return False
            elapsed_ms = (self.time_source() - start_instant) * 1000.0
            if self.controller.sync_to(elapsed_ms):
                session.finished = True
                logger.info("Reached the last line; lyric sync finished.")
                return False
            return True

    def resync(self, offset_ms: int, background: bool = True) -> None:
        """
        Re-anchors the session so that the elapsed time equals `offset_ms`.

        A session that had already reached its last entry polls again.
        """
        with self.controller.lock:
            session = self.session
            if session is None or session.stopped:
                return
            self.controller.rebase(self.time_source() - offset_ms / 1000.0)
            logger.debug(f"Clock re-anchored at {offset_ms} ms.")
            if not session.finished:
                return
            if self.controller.current_index >= len(self.controller) - 1:
                return
            session.finished = False
        if background:
            # The previous polling thread exits right after the terminal tick
            session.join()
            self._spawn(session)

    def halt(self) -> None:
        """
        Marks the current session stopped without waiting for its thread.

        Usable while holding the controller lock; the polling thread exits
        on its next wake-up without emitting.
        """
        with self.controller.lock:
            session = self.session
            if session is None:
                return
            if not session.stopped:
                logger.info("Stopping lyric sync.")
            session.stopped = True
            session.stop_event.set()

    def stop(self) -> None:
        """
        Stops the current session. No emission happens after this returns.

        Safe to call repeatedly or without an active session.
        """
        self.halt()
        if self.session is not None:
            self.session.join()

    def _spawn(self, session: ClockSession) -> None:
        session.thread = threading.Thread(target=self._poll, args=(session,), name="lyric-sync-clock", daemon=True)
        session.thread.start()

    def _poll(self, session: ClockSession) -> None:
        while not session.stop_event.wait(self.poll_interval):
            if self.session is not session or not self.tick():
                break
        logger.debug("Clock polling task exited.")
