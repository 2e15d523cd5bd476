"""Offline translation using Hugging Face models."""

import logging
import torch
from transformers import AutoTokenizer, AutoModelForSeq2SeqLM
from typing import List, Optional

from .translator import Translator
from .exceptions import TranslationFailedError, ConfigurationError

logger = logging.getLogger(__name__)

class HuggingFaceTranslator(Translator):
    """Implements translation using Hugging Face Transformers models."""

    def __init__(self, model_name: str = "Helsinki-NLP/opus-mt-en-es", device: str = "cpu"):
        """
        Initializes the HuggingFaceTranslator.

        The model fixes the language pair, so it must match the configured
        source and target languages.

        Args:
            model_name: The name of the Hugging Face translation model.
            device: The device to run the model on ("cuda" or "cpu").

        Raises:
            ValueError: If the specified device is invalid.
            ConfigurationError: If the model or tokenizer fails to load.
        """
        self.model_name = model_name
        self.device = device

        if self.device == "cuda" and not torch.cuda.is_available():
            logger.warning("CUDA device requested but not available for translation. Falling back to CPU.")
            self.device = "cpu"
        elif self.device not in ["cuda", "cpu"]:
            raise ValueError(f"Invalid device specified: {self.device}. Choose 'cuda' or 'cpu'.")

        logger.info(f"Initializing HuggingFaceTranslator with model '{self.model_name}' on device '{self.device}'")
        try:
            self.tokenizer = AutoTokenizer.from_pretrained(self.model_name)
            self.model = AutoModelForSeq2SeqLM.from_pretrained(self.model_name)
            self.model.to(self.device)
            self.model.eval()
        except Exception as e:
            logger.error(f"Failed to load translation model or tokenizer '{self.model_name}': {e}", exc_info=True)
            raise ConfigurationError(f"Failed to load translation model/tokenizer '{self.model_name}': {e}") from e

    def translate(self, text: str, source_lang: str, target_lang: str, project_id: Optional[str] = None) -> List[str]:
        logger.debug(f"Translating ({source_lang}->{target_lang}): '{text[:50]}...'")
        try:
            inputs = self.tokenizer(text, return_tensors="pt", padding=True, truncation=True, max_length=512)
            inputs = {k: v.to(self.device) for k, v in inputs.items()}

            with torch.no_grad():
                translated_tokens = self.model.generate(**inputs)

            translated_text = self.tokenizer.decode(translated_tokens[0], skip_special_tokens=True)
        except Exception as e:
            logger.error(f"Error during translation of text '{text[:50]}...': {e}", exc_info=True)
            raise TranslationFailedError(f"Hugging Face translation failed: {e}") from e

        return [translated_text] if translated_text else []
