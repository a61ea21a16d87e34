"""Display sinks: the boundary where rendered text leaves the engine."""

import logging
import sys
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, TextIO

from .exceptions import DisplaySinkError

logger = logging.getLogger(__name__)

class DisplaySink(ABC):
    """Abstract base class for display sinks."""

    @abstractmethod
    def emit(self, msg_code: int, payload: bytes) -> None:
        """
        Delivers one rendered payload to the display.

        Args:
            msg_code: Small integer tagging the payload type (0x0a = plain text).
            payload: UTF-8 bytes of the wrapped text.

        Raises:
            DisplaySinkError: If the payload could not be delivered.
        """
        pass

    def close(self) -> None:
        """Releases any resources held by the sink."""
        pass


class ConsoleSink(DisplaySink):
    """Prints each payload to a terminal stream, framed like the display."""

    def __init__(self, stream: Optional[TextIO] = None, width: int = 40):
        self.stream = stream or sys.stdout
        self.width = width

    def emit(self, msg_code: int, payload: bytes) -> None:
        text = payload.decode('utf-8')
        border = "-" * self.width
        try:
            self.stream.write(f"{border}\n{text}\n{border}\n")
            self.stream.flush()
        except OSError as e:
            raise DisplaySinkError(f"Could not write to console: {e}") from e


class CallbackSink(DisplaySink):
    """Forwards payloads to a callable, e.g. a device transport's send method."""

    def __init__(self, callback: Callable[[int, bytes], None]):
        self.callback = callback

    def emit(self, msg_code: int, payload: bytes) -> None:
        self.callback(msg_code, payload)


class FireAndForgetSink(DisplaySink):
    """
    Wraps another sink so that delivery failures never reach the caller.

    Failures are logged and dropped; nothing is retried. With
    `background=True` every payload is handed to a single worker thread,
    which keeps a slow transport off the caller's critical path while
    preserving emission order.
    """

    def __init__(self, inner: DisplaySink, background: bool = True):
        self.inner = inner
        self.background = background
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="display-sink") if background else None

    def emit(self, msg_code: int, payload: bytes) -> None:
        if self._executor is None:
            self._deliver(msg_code, payload)
            return
        try:
            future = self._executor.submit(self._deliver, msg_code, payload)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning(f"Dropping display payload after sink shutdown: {e}")
            return
        future.add_done_callback(self._log_unexpected)

    def _deliver(self, msg_code: int, payload: bytes) -> None:
        try:
            self.inner.emit(msg_code, payload)
        except Exception as e:
            logger.warning(f"Display sink failed to deliver message 0x{msg_code:02x} ({len(payload)} bytes): {e}")

    @staticmethod
    def _log_unexpected(future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Unexpected error in display sink worker: {error}", exc_info=error)

    def close(self) -> None:
        """Waits for queued payloads to be delivered, then closes the inner sink."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
        self.inner.close()
