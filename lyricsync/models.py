"""Data models for LyricSync."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import List, Optional

MSG_CODE_PLAIN_TEXT = 0x0a
IDLE_PLACEHOLDER = "Load an LRC file"

@dataclass(frozen=True)
class TimelineEntry:
    """A single lyric line and the offset at which it becomes current."""
    offset_ms: int
    text: str

    def __post_init__(self):
        if self.offset_ms < 0:
            raise ValueError(f"Timeline offset cannot be negative: {self.offset_ms}")

    @property
    def offset(self) -> timedelta:
        return timedelta(milliseconds=self.offset_ms)

# Ordered by offset_ms, ties in file order
Timeline = List[TimelineEntry]

@dataclass
class SyncState:
    """Playback state shared by the clock and manual gestures."""
    start_instant: Optional[float] = None # time.monotonic() reading
    current_index: int = -1

class PlaybackMode(str, Enum):
    AUTO = "auto"
    TIMED = "timed"
    MANUAL = "manual"

class ManualOverridePolicy(str, Enum):
    """What the clock does after a manual gesture during a timed session."""
    CLOCK_WINS = "clock_wins"
    PAUSE = "pause"
    RESYNC = "resync"

class ApplicationState(str, Enum):
    READY = "ready"
    RUNNING = "running"

@dataclass
class LoadedFile:
    """Raw bytes handed over by a file source."""
    name: str
    data: bytes
