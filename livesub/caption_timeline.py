"""Ordered caption list and its subtitle file."""

import logging
import os
import threading
from typing import List, Optional

from .models import CaptionCue
from .subtitle_formatter import SubtitleFormatter, WebVTTFormatter
from .exceptions import WriteFailedError, FileSystemError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

DEFAULT_CUE_DURATION = 10.0

class CaptionTimeline:
    """
    Collects translated caption lines and renders them as a subtitle track.

    Cue times come from position alone: line ``i`` spans
    ``[i * cue_duration, (i + 1) * cue_duration)``. Lines are only ever
    appended, and the whole document is regenerated on every render.
    """

    def __init__(
        self,
        output_path: str,
        formatter: Optional[SubtitleFormatter] = None,
        cue_duration: float = DEFAULT_CUE_DURATION
    ):
        if cue_duration <= 0:
            raise ValueError(f"cue_duration must be positive, got {cue_duration}")
        self.output_path = output_path
        self.formatter = formatter or WebVTTFormatter()
        self.cue_duration = cue_duration
        self._lines: List[str] = []
        self._lock = threading.Lock()

    @property
    def lines(self) -> List[str]:
        """A copy of the caption lines in insertion order."""
        with self._lock:
            return list(self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def append(self, text: str) -> int:
        """Adds a caption line to the end and returns its index."""
        with self._lock:
            self._lines.append(text)
            return len(self._lines) - 1

    def cues(self) -> List[CaptionCue]:
        return [
            CaptionCue(
                start_time=index * self.cue_duration,
                end_time=(index + 1) * self.cue_duration,
                text=line
            )
            for index, line in enumerate(self.lines)
        ]

    def render(self) -> str:
        """Returns the full subtitle document for the current lines."""
        return self.formatter.format_document(self.cues())

    def save(self) -> str:
        """
        Renders the timeline and replaces the output file with it.

        The document goes to a sibling temp file first and is then moved over
        the output path, so readers never see a half-written track.

        Returns:
            The path written.

        Raises:
            WriteFailedError: If the file cannot be written.
        """
        document = self.render()
        temp_path = f"{self.output_path}.tmp"
        try:
            parent_dir = os.path.dirname(self.output_path)
            if parent_dir:
                ensure_dir_exists(parent_dir)
            with open(temp_path, 'w', encoding='utf-8') as f:
                f.write(document)
            os.replace(temp_path, self.output_path)
        except (OSError, FileSystemError) as e:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    logger.warning(f"Could not clean up partially written file: {temp_path}")
            raise WriteFailedError(f"Could not write subtitles to {self.output_path}: {e}") from e

        logger.info(f"Wrote {len(document)} characters ({len(self)} cues) to {self.output_path}")
        return self.output_path
