"""Sources of raw file bytes for the teleprompter."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .exceptions import FileLoadError
from .models import LoadedFile

logger = logging.getLogger(__name__)

class FileSource(ABC):
    """Abstract base class for anything that can hand over a file to display."""

    @abstractmethod
    def pick(self) -> Optional[LoadedFile]:
        """
        Obtains the next file to display.

        Returns:
            The file name and raw bytes, or None when nothing was selected.

        Raises:
            FileLoadError: If a file was selected but could not be read.
        """
        pass


class PathFileSource(FileSource):
    """Reads a fixed path from the local file system."""

    def __init__(self, path: str, allowed_extensions: Optional[Sequence[str]] = None):
        """
        Initializes the PathFileSource.

        Args:
            path: Path of the file to read.
            allowed_extensions: Optional extensions (e.g. ['.lrc']) the path
                                must carry; other paths count as no selection.
        """
        self.path = path
        self.allowed_extensions = [ext.lower() for ext in allowed_extensions] if allowed_extensions else None

    def pick(self) -> Optional[LoadedFile]:
        if not self.path:
            return None
        extension = os.path.splitext(self.path)[1].lower()
        if self.allowed_extensions is not None and extension not in self.allowed_extensions:
            logger.debug(f"Ignoring {self.path}: extension {extension!r} not in {self.allowed_extensions}")
            return None
        if not os.path.isfile(self.path):
            logger.debug(f"No file at {self.path}")
            return None
        try:
            with open(self.path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise FileLoadError(f"Could not read {self.path}: {e}") from e
        logger.info(f"Read {len(data)} bytes from {self.path}")
        return LoadedFile(name=os.path.basename(self.path), data=data)
