"""Handles Speech-to-Text recognition of raw PCM audio."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from google.cloud import speech

from .models import RecognitionResult, RecognitionAlternative
from .exceptions import RecognitionFailedError, ConfigurationError

logger = logging.getLogger(__name__)

class Recognizer(ABC):
    """Abstract base class for speech recognition services."""

    @abstractmethod
    def recognize(self, audio: bytes, language_code: str, sample_rate: int) -> List[RecognitionResult]:
        """
        Recognizes speech in a raw audio buffer.

        Args:
            audio: Mono, signed 16-bit little-endian PCM bytes.
            language_code: BCP-47 code of the spoken language (e.g., 'en-US').
            sample_rate: Sample rate of the audio in Hz.

        Returns:
            Ordered recognition results, each with ordered alternatives.

        Raises:
            RecognitionFailedError: If the recognition call fails.
        """
        pass

class GoogleSpeechRecognizer(Recognizer):
    """Implements recognition using Google Cloud Speech-to-Text (v1)."""

    def __init__(
        self,
        credentials_file: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[speech.SpeechClient] = None
    ):
        """
        Initializes the GoogleSpeechRecognizer.

        Args:
            credentials_file: Path to a service account JSON key. If None,
                              application default credentials are used.
            timeout: Per-request timeout in seconds. None uses the client default.
            client: Pre-built SpeechClient, mainly for tests.

        Raises:
            ConfigurationError: If the client cannot be created.
        """
        self.timeout = timeout
        if client is not None:
            self.client = client
            return

        try:
            if credentials_file:
                logger.info(f"Creating Speech-to-Text client with credentials from {credentials_file}")
                self.client = speech.SpeechClient.from_service_account_file(credentials_file)
            else:
                logger.info("Creating Speech-to-Text client with default credentials")
                self.client = speech.SpeechClient()
        except Exception as e:
            logger.error(f"Failed to create speech client: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to create speech client: {e}") from e

    def recognize(self, audio: bytes, language_code: str, sample_rate: int) -> List[RecognitionResult]:
        config = speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding.LINEAR16,
            sample_rate_hertz=sample_rate,
            language_code=language_code,
        )
        request_audio = speech.RecognitionAudio(content=audio)

        kwargs = {}
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout

        logger.debug(f"Sending {len(audio)} bytes to Speech-to-Text ({language_code}, {sample_rate} Hz)")
        try:
            response = self.client.recognize(config=config, audio=request_audio, **kwargs)
        except Exception as e:
            logger.error(f"Speech-to-Text request failed: {e}", exc_info=True)
            raise RecognitionFailedError(f"Failed to recognize speech: {e}") from e

        results = []
        for result in response.results:
            alternatives = [
                RecognitionAlternative(transcript=alt.transcript, confidence=alt.confidence)
                for alt in result.alternatives
            ]
            results.append(RecognitionResult(alternatives=alternatives))
        logger.debug(f"Speech-to-Text returned {len(results)} results")
        return results
