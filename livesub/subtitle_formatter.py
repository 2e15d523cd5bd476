"""Handles formatting caption cues into subtitle documents (WebVTT, SRT)."""

from abc import ABC, abstractmethod
from typing import List

from .models import CaptionCue
from .utils import format_time_vtt, format_time_srt

class SubtitleFormatter(ABC):
    """Abstract base class for subtitle formatters."""

    @abstractmethod
    def format_document(self, cues: List[CaptionCue]) -> str:
        """
        Serializes cues into a complete subtitle document.

        Args:
            cues: Cues in display order.

        Returns:
            The full document text.
        """
        pass

class WebVTTFormatter(SubtitleFormatter):
    """Formats subtitles into the WebVTT (Web Video Text Tracks) format."""

    header = "WEBVTT\n\n"

    def format_document(self, cues: List[CaptionCue]) -> str:
        blocks = [self.header]
        for cue in cues:
            blocks.append(f"{format_time_vtt(cue.start_time)} --> {format_time_vtt(cue.end_time)}\n{cue.text}\n\n")
        return "".join(blocks)

class SRTFormatter(SubtitleFormatter):
    """Formats subtitles into the SRT (SubRip Text) format."""

    def format_document(self, cues: List[CaptionCue]) -> str:
        blocks = []
        for subtitle_index, cue in enumerate(cues, start=1):
            blocks.append(f"{subtitle_index}\n")
            blocks.append(f"{format_time_srt(cue.start_time)} --> {format_time_srt(cue.end_time)}\n")
            blocks.append(f"{cue.text}\n\n")
        return "".join(blocks)

FORMATTERS = {
    'vtt': WebVTTFormatter,
    'srt': SRTFormatter,
}

def get_formatter(output_format: str) -> SubtitleFormatter:
    """Returns a formatter instance for 'vtt' or 'srt'."""
    try:
        return FORMATTERS[output_format.lower()]()
    except KeyError:
        raise ValueError(f"Unsupported output format '{output_format}'. Choose from {sorted(FORMATTERS)}.") from None
