import pytest

from lyricsync.config_loader import EngineSettings
from lyricsync.display_sink import DisplaySink
from lyricsync.file_source import FileSource
from lyricsync.models import LoadedFile


class RecordingSink(DisplaySink):
    def __init__(self):
        self.messages = []

    def emit(self, msg_code, payload):
        self.messages.append((msg_code, payload))

    @property
    def texts(self):
        return [payload.decode("utf-8") for _, payload in self.messages]


class FailingSink(DisplaySink):
    def __init__(self):
        self.attempts = 0

    def emit(self, msg_code, payload):
        self.attempts += 1
        raise ConnectionError("display disconnected")


class FakeClock:
    """Monotonic clock advanced by hand, in seconds."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += ms / 1000.0


class MemoryFileSource(FileSource):
    def __init__(self, name=None, data=None, error=None):
        self.name = name
        self.data = data
        self.error = error

    def pick(self):
        if self.error is not None:
            raise self.error
        if self.name is None:
            return None
        return LoadedFile(name=self.name, data=self.data)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def settings():
    return EngineSettings()
