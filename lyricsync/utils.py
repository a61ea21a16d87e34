"""Utility functions for LyricSync."""

import os
import logging
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def format_offset(offset_ms: int) -> str:
    """
    Formats a millisecond offset as MM:SS.mmm.

    Minutes are not wrapped into hours, so long tracks show e.g. 75:03.250.

    Args:
        offset_ms: Offset in milliseconds.

    Returns:
        Formatted offset string.
    """
    if offset_ms < 0:
        offset_ms = 0 # Offsets are never negative
    mins = offset_ms // 60000
    offset_ms %= 60000
    secs = offset_ms // 1000
    millis = offset_ms % 1000
    return f"{mins:02d}:{secs:02d}.{millis:03d}"

def file_mode_for(path: str) -> str:
    """Returns 'timed' for .lrc files and 'manual' for anything else."""
    return 'timed' if os.path.splitext(path)[1].lower() == '.lrc' else 'manual'
