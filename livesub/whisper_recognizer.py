"""Offline speech recognition using OpenAI's Whisper."""

import logging
from typing import List

import numpy as np
import torch
import whisper

from .models import RecognitionResult, RecognitionAlternative
from .recognizer import Recognizer
from .exceptions import RecognitionFailedError, ConfigurationError

logger = logging.getLogger(__name__)

WHISPER_SAMPLE_RATE = 16000

class WhisperRecognizer(Recognizer):
    """Implements recognition using a locally loaded Whisper model."""

    def __init__(self, model_name: str = "base", device: str = "cpu", fp16: bool = False):
        """
        Initializes the WhisperRecognizer.

        Args:
            model_name: The name of the Whisper model to use (e.g., "base", "small").
            device: The device to run the model on ("cuda" or "cpu").
            fp16: Whether to use float16 precision (CUDA only).

        Raises:
            ValueError: If the specified device is invalid.
            ConfigurationError: If the model fails to load.
        """
        self.model_name = model_name
        self.device = device
        self.fp16 = fp16

        if self.device == "cuda" and not torch.cuda.is_available():
            logger.warning("CUDA device requested but not available. Falling back to CPU.")
            self.device = "cpu"
        elif self.device not in ["cuda", "cpu"]:
            raise ValueError(f"Invalid device specified: {self.device}. Choose 'cuda' or 'cpu'.")

        logger.info(f"Initializing WhisperRecognizer with model '{self.model_name}' on device '{self.device}'")
        try:
            self.model = whisper.load_model(self.model_name, device=self.device)
        except Exception as e:
            logger.error(f"Failed to load Whisper model '{self.model_name}': {e}", exc_info=True)
            raise ConfigurationError(f"Failed to load Whisper model '{self.model_name}': {e}") from e

    @staticmethod
    def _to_float_audio(audio: bytes) -> np.ndarray:
        # Same normalization whisper.load_audio applies to ffmpeg's s16le output
        return np.frombuffer(audio, np.int16).flatten().astype(np.float32) / 32768.0

    def recognize(self, audio: bytes, language_code: str, sample_rate: int) -> List[RecognitionResult]:
        if sample_rate != WHISPER_SAMPLE_RATE:
            raise RecognitionFailedError(
                f"Whisper expects {WHISPER_SAMPLE_RATE} Hz audio, got {sample_rate} Hz"
            )

        # Whisper takes bare ISO-639-1 codes ('en'), not regional tags ('en-US')
        language = language_code.split('-')[0].lower() if language_code else None
        try:
            result = self.model.transcribe(
                self._to_float_audio(audio),
                language=language,
                fp16=self.fp16 if self.device == "cuda" else False,
                verbose=False
            )
        except Exception as e:
            logger.error(f"Error during Whisper transcription: {e}", exc_info=True)
            raise RecognitionFailedError(f"Whisper transcription failed: {e}") from e

        results = []
        for seg_data in result.get('segments', []):
            text = seg_data.get('text', '').strip()
            if text:
                results.append(RecognitionResult(alternatives=[RecognitionAlternative(transcript=text)]))
        logger.debug(f"Whisper returned {len(results)} segments")
        return results
