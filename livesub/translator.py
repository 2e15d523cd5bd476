"""Handles text translation of recognized transcripts."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from google.cloud import translate_v3 as translate

from .exceptions import TranslationFailedError, ConfigurationError

logger = logging.getLogger(__name__)

class Translator(ABC):
    """Abstract base class for translation services."""

    @abstractmethod
    def translate(self, text: str, source_lang: str, target_lang: str, project_id: Optional[str]) -> List[str]:
        """
        Translates text from source to target language.

        Args:
            text: The text to translate.
            source_lang: Source language code (e.g., 'en-US').
            target_lang: Target language code (e.g., 'es').
            project_id: Cloud project the request is billed to, if the service needs one.

        Returns:
            The translations in the order returned by the service. May be empty.

        Raises:
            TranslationFailedError: If translation fails.
        """
        pass

class GoogleTranslator(Translator):
    """Implements translation using Google Cloud Translation (v3)."""

    def __init__(
        self,
        credentials_file: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[translate.TranslationServiceClient] = None
    ):
        """
        Initializes the GoogleTranslator.

        Args:
            credentials_file: Path to a service account JSON key. If None,
                              application default credentials are used.
            timeout: Per-request timeout in seconds. None uses the client default.
            client: Pre-built TranslationServiceClient, mainly for tests.

        Raises:
            ConfigurationError: If the client cannot be created.
        """
        self.timeout = timeout
        if client is not None:
            self.client = client
            return

        try:
            if credentials_file:
                logger.info(f"Creating Translation client with credentials from {credentials_file}")
                self.client = translate.TranslationServiceClient.from_service_account_file(credentials_file)
            else:
                logger.info("Creating Translation client with default credentials")
                self.client = translate.TranslationServiceClient()
        except Exception as e:
            logger.error(f"Failed to create translate client: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to create translate client: {e}") from e

    def translate(self, text: str, source_lang: str, target_lang: str, project_id: Optional[str]) -> List[str]:
        if not project_id:
            raise TranslationFailedError("Google Translation requires a project id.")

        # Source language is left to the service's auto-detection.
        request = {
            "parent": f"projects/{project_id}/locations/global",
            "contents": [text],
            "target_language_code": target_lang,
            "mime_type": "text/plain",
        }
        kwargs = {}
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout

        logger.debug(f"Translating (->{target_lang}): '{text[:50]}...'")
        try:
            response = self.client.translate_text(request=request, **kwargs)
        except Exception as e:
            logger.error(f"Translation request failed: {e}", exc_info=True)
            raise TranslationFailedError(f"Failed to translate: {e}") from e

        return [translation.translated_text for translation in response.translations]
