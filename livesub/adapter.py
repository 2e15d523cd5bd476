"""Turns a raw audio buffer into translated caption text."""

import logging
from typing import List, Optional

from .recognizer import Recognizer
from .translator import Translator
from .models import RecognitionResult
from .exceptions import (
    LiveSubError,
    EmptyInputError,
    RecognitionFailedError,
    NoTranscriptError,
    TranslationFailedError,
    NoTranslationError,
)

logger = logging.getLogger(__name__)

ALTERNATIVE_POLICIES = ("all", "top")

class TranscriptionTranslationAdapter:
    """
    Sends audio to a recognizer and the resulting transcript to a translator.

    With the default "all" policy every alternative of every recognition
    result is joined with a single space into one transcript. The "top"
    policy keeps only the first alternative of each result.
    """

    def __init__(
        self,
        recognizer: Recognizer,
        translator: Translator,
        sample_rate: int = 16000,
        alternative_policy: str = "all"
    ):
        if alternative_policy not in ALTERNATIVE_POLICIES:
            raise ValueError(f"Unknown alternative policy '{alternative_policy}'. Choose from {ALTERNATIVE_POLICIES}.")
        self.recognizer = recognizer
        self.translator = translator
        self.sample_rate = sample_rate
        self.alternative_policy = alternative_policy

    def build_transcript(self, results: List[RecognitionResult]) -> str:
        """Flattens recognition results into one transcript string."""
        parts = []
        for result in results:
            alternatives = result.alternatives
            if self.alternative_policy == "top":
                alternatives = alternatives[:1]
            for alt in alternatives:
                text = alt.transcript.strip()
                if text:
                    parts.append(text)
        return " ".join(parts)

    def process(self, buffer: bytes, source_lang: str, target_lang: str, project_id: Optional[str]) -> str:
        """
        Recognizes and translates one audio buffer.

        Args:
            buffer: Mono 16-bit PCM audio.
            source_lang: Language spoken in the audio.
            target_lang: Language to translate into.
            project_id: Cloud project for the translation request.

        Returns:
            The first translation of the full transcript.

        Raises:
            EmptyInputError: If the buffer is empty. No engine is called.
            RecognitionFailedError: If the recognizer fails.
            NoTranscriptError: If recognition produced no text.
            TranslationFailedError: If the translator fails.
            NoTranslationError: If the translator returned nothing.
        """
        if not buffer:
            raise EmptyInputError("Audio content is empty")

        try:
            results = self.recognizer.recognize(buffer, source_lang, self.sample_rate)
        except LiveSubError:
            raise
        except Exception as e:
            raise RecognitionFailedError(f"Failed to recognize speech: {e}") from e

        transcript = self.build_transcript(results)
        if not transcript:
            raise NoTranscriptError("No recognition result returned")
        logger.info(f"Transcript: {transcript}")

        try:
            translations = self.translator.translate(transcript, source_lang, target_lang, project_id)
        except LiveSubError:
            raise
        except Exception as e:
            raise TranslationFailedError(f"Failed to translate: {e}") from e

        if not translations:
            raise NoTranslationError("No translation returned")

        translated = translations[0]
        logger.info(f"Translation ({target_lang}): {translated}")
        return translated
