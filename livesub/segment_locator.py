"""Finds the newest media segment referenced by an HLS playlist."""

import logging
import os
from typing import Optional

from .exceptions import ManifestUnavailableError, NoSegmentFoundError
from .models import SegmentReference

logger = logging.getLogger(__name__)

class SegmentLocator:
    """
    Reads an HLS media playlist and resolves its latest segment entry.

    The playlist is trusted to be append-ordered: the last line ending in the
    segment suffix is the latest segment. Media sequence tags and segment
    numbers are ignored.
    """

    def __init__(self, manifest_path: str, base_dir: Optional[str] = None, segment_suffix: str = ".ts"):
        """
        Initializes the SegmentLocator.

        Args:
            manifest_path: Path to the .m3u8 playlist file.
            base_dir: Directory segment names are resolved against.
                      Defaults to the playlist's own directory.
            segment_suffix: File suffix that marks a media segment line.
        """
        if not segment_suffix:
            raise ValueError("segment_suffix cannot be empty.")
        self.manifest_path = manifest_path
        self.base_dir = base_dir if base_dir is not None else os.path.dirname(manifest_path)
        self.segment_suffix = segment_suffix

    def locate(self) -> SegmentReference:
        """
        Scans the manifest once and returns the last segment entry.

        Returns:
            A SegmentReference for the latest segment.

        Raises:
            ManifestUnavailableError: If the manifest cannot be opened or read.
            NoSegmentFoundError: If no line ends in the segment suffix.
        """
        latest = None
        try:
            with open(self.manifest_path, 'r', encoding='utf-8') as f:
                for line in f:
                    entry = line.strip()
                    if entry.endswith(self.segment_suffix):
                        latest = entry
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestUnavailableError(f"Failed to read manifest file {self.manifest_path}: {e}") from e

        if latest is None:
            raise NoSegmentFoundError(f"No {self.segment_suffix} files found in manifest {self.manifest_path}")

        segment_path = os.path.join(self.base_dir, latest)
        logger.info(f"Processing segment: {segment_path}")
        return SegmentReference(name=latest, path=segment_path)
