"""Utility functions for LiveSub."""

import os
import logging
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional
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

@contextmanager
def temporary_path(prefix: str = "tmp_", suffix: str = "", dir: Optional[str] = None) -> Iterator[str]:
    """
    Yields the path of a fresh, empty temporary file and removes it on exit.

    The file is removed whether the body finishes normally or raises.
    """
    fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=dir)
    os.close(fd)
    try:
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary file {path}: {e}")

def _split_millis(seconds: float):
    if seconds < 0:
        seconds = 0.0 # Ensure non-negative time
    milliseconds = round(seconds * 1000)
    hrs = milliseconds // 3600000
    milliseconds %= 3600000
    mins = milliseconds // 60000
    milliseconds %= 60000
    secs = milliseconds // 1000
    milliseconds %= 1000
    return hrs, mins, secs, milliseconds

def format_time_vtt(seconds: float) -> str:
    """
    Formats seconds into WebVTT time format HH:MM:SS.mmm.

    Args:
        seconds: Time in seconds.

    Returns:
        Formatted time string.
    """
    hrs, mins, secs, millis = _split_millis(seconds)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}.{millis:03d}"

def format_time_srt(seconds: float) -> str:
    """Formats seconds into SRT time format HH:MM:SS,mmm."""
    hrs, mins, secs, millis = _split_millis(seconds)
    return f"{hrs:02d}:{mins:02d}:{secs:02d},{millis:03d}"
