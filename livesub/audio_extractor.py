"""Handles audio extraction from MPEG-TS segments using ffmpeg."""

import ffmpeg
import os
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

from .exceptions import (
    SegmentNotFoundError,
    InvalidContainerError,
    TranscodeFailedError,
    EmptyAudioError,
)
from .utils import temporary_path

logger = logging.getLogger(__name__)

TS_PACKET_SIZE = 188
TS_SYNC_BYTE = 0x47

# Raw PCM layout expected by the recognizers.
SAMPLE_RATE = 16000
CHANNELS = 1
PCM_CODEC = 'pcm_s16le'
PCM_FORMAT = 's16le'

class Transcoder(ABC):
    """Abstract base class for container-to-PCM converters."""

    @abstractmethod
    def extract_audio(self, container_path: str) -> bytes:
        """
        Converts the audio track of a media file to raw PCM.

        Args:
            container_path: Path to the media file.

        Returns:
            Mono, 16 kHz, signed 16-bit little-endian PCM bytes.

        Raises:
            TranscodeFailedError: If conversion fails.
        """
        pass

class FfmpegTranscoder(Transcoder):
    """Converts media files to raw PCM by running ffmpeg."""

    def __init__(self, ffmpeg_path: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initializes the FfmpegTranscoder.

        Args:
            ffmpeg_path: Optional path to the ffmpeg executable.
                         If None, assumes ffmpeg is in the system PATH.
            timeout: Seconds to wait for ffmpeg before killing it. None waits forever.
        """
        self.ffmpeg_cmd = ffmpeg_path or 'ffmpeg'
        self.timeout = timeout
        logger.info(f"Using ffmpeg command: {self.ffmpeg_cmd}")

    def _build_stream(self, container_path: str, output_path: str):
        return (
            ffmpeg
            .input(container_path)
            .output(
                output_path,
                vn=None,
                acodec=PCM_CODEC,
                f=PCM_FORMAT,
                ac=CHANNELS,
                ar=SAMPLE_RATE,
            )
            .overwrite_output()
        )

    def extract_audio(self, container_path: str) -> bytes:
        with temporary_path(prefix="audio_", suffix=".raw") as raw_path:
            stream = self._build_stream(container_path, raw_path)
            try:
                process = ffmpeg.run_async(stream, cmd=self.ffmpeg_cmd, pipe_stdout=True, pipe_stderr=True)
            except OSError as e:
                raise TranscodeFailedError(f"Could not start {self.ffmpeg_cmd}: {e}") from e

            try:
                _, stderr = process.communicate(timeout=self.timeout)
            except subprocess.TimeoutExpired as e:
                process.kill()
                process.communicate()
                raise TranscodeFailedError(
                    f"ffmpeg timed out after {self.timeout}s on {container_path}"
                ) from e

            if process.returncode != 0:
                stderr_output = stderr.decode('utf-8', errors='replace') if stderr else "No stderr output"
                logger.error(f"ffmpeg stderr: {stderr_output}")
                raise TranscodeFailedError(
                    f"ffmpeg exited with status {process.returncode} for {container_path}"
                )

            try:
                with open(raw_path, 'rb') as f:
                    audio = f.read()
            except OSError as e:
                raise TranscodeFailedError(f"Failed to read extracted audio {raw_path}: {e}") from e

            logger.info(f"Extracted audio file size: {len(audio)} bytes")
            return audio

class AudioExtractor:
    """Validates MPEG-TS segments and extracts their audio as raw PCM."""

    def __init__(self, transcoder: Transcoder):
        self.transcoder = transcoder

    def _check_container(self, segment_path: str) -> None:
        try:
            size = os.path.getsize(segment_path)
            logger.info(f"Segment file size: {size} bytes")
            with open(segment_path, 'rb') as f:
                header = f.read(TS_PACKET_SIZE)
        except OSError as e:
            raise SegmentNotFoundError(f"Failed to read segment file {segment_path}: {e}") from e

        if not header or header[0] != TS_SYNC_BYTE:
            raise InvalidContainerError(f"Invalid MPEG-TS file: {segment_path}")

    def extract(self, segment_path: str) -> bytes:
        """
        Extracts the audio of one segment.

        Args:
            segment_path: Path to the .ts segment.

        Returns:
            Raw PCM audio bytes (mono, 16 kHz, s16le).

        Raises:
            SegmentNotFoundError: If the segment is missing or unreadable.
            InvalidContainerError: If the file does not start with the TS sync byte.
            TranscodeFailedError: If the transcoder fails.
            EmptyAudioError: If no audio was produced.
        """
        if not os.path.isfile(segment_path):
            raise SegmentNotFoundError(f"Segment file not found: {segment_path}")

        self._check_container(segment_path)

        audio = self.transcoder.extract_audio(segment_path)
        if not audio:
            raise EmptyAudioError(f"Extracted audio is empty for segment: {segment_path}")

        logger.info(f"Successfully extracted {len(audio)} bytes of audio from segment: {segment_path}")
        return audio
