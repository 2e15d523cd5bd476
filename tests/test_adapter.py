"""Tests for TranscriptionTranslationAdapter."""

import pytest

from livesub.adapter import TranscriptionTranslationAdapter
from livesub.models import RecognitionResult
from livesub.exceptions import (
    EmptyInputError,
    RecognitionFailedError,
    NoTranscriptError,
    TranslationFailedError,
    NoTranslationError,
)
from conftest import FakeRecognizer, FakeTranslator, make_results

AUDIO = b"\x01\x00" * 100


def make_adapter(recognizer=None, translator=None, **kwargs):
    return TranscriptionTranslationAdapter(
        recognizer or FakeRecognizer(),
        translator or FakeTranslator(),
        **kwargs
    )


class TestProcess:
    """Happy paths."""

    def test_returns_first_translation(self):
        translator = FakeTranslator(translations=["hola", "buenas"])
        adapter = make_adapter(FakeRecognizer(make_results(["hello"])), translator)

        assert adapter.process(AUDIO, "en-US", "es", "proj-1") == "hola"
        assert translator.calls == [("hello", "en-US", "es", "proj-1")]

    def test_passes_audio_language_and_rate_to_recognizer(self):
        recognizer = FakeRecognizer()
        make_adapter(recognizer).process(AUDIO, "de-DE", "en", "proj")

        assert recognizer.calls == [(AUDIO, "de-DE", 16000)]

    def test_concatenates_every_alternative_of_every_result(self):
        recognizer = FakeRecognizer(make_results(["good morning", "could morning"], ["everyone"]))
        translator = FakeTranslator()

        make_adapter(recognizer, translator).process(AUDIO, "en-US", "es", "proj")

        assert translator.calls[0][0] == "good morning could morning everyone"

    def test_top_policy_keeps_first_alternative_per_result(self):
        recognizer = FakeRecognizer(make_results(["good morning", "could morning"], ["everyone", "every one"]))
        translator = FakeTranslator()

        make_adapter(recognizer, translator, alternative_policy="top").process(AUDIO, "en-US", "es", "proj")

        assert translator.calls[0][0] == "good morning everyone"

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            make_adapter(alternative_policy="best")


class TestProcessErrors:
    """Every failure mode of the recognize-then-translate chain."""

    def test_empty_buffer_makes_no_calls(self):
        recognizer = FakeRecognizer()
        translator = FakeTranslator()

        with pytest.raises(EmptyInputError):
            make_adapter(recognizer, translator).process(b"", "en-US", "es", "proj")
        assert recognizer.calls == []
        assert translator.calls == []

    def test_recognition_failure(self):
        translator = FakeTranslator()
        adapter = make_adapter(FakeRecognizer(error=RecognitionFailedError("quota")), translator)

        with pytest.raises(RecognitionFailedError):
            adapter.process(AUDIO, "en-US", "es", "proj")
        assert translator.calls == []

    def test_unexpected_recognizer_exception_is_wrapped(self):
        adapter = make_adapter(FakeRecognizer(error=ConnectionError("reset")))

        with pytest.raises(RecognitionFailedError) as excinfo:
            adapter.process(AUDIO, "en-US", "es", "proj")
        assert isinstance(excinfo.value.__cause__, ConnectionError)

    def test_zero_results(self):
        translator = FakeTranslator()

        with pytest.raises(NoTranscriptError):
            make_adapter(FakeRecognizer(results=[]), translator).process(AUDIO, "en-US", "es", "proj")
        assert translator.calls == []

    def test_results_without_alternatives(self):
        recognizer = FakeRecognizer(results=[RecognitionResult(), RecognitionResult()])

        with pytest.raises(NoTranscriptError):
            make_adapter(recognizer).process(AUDIO, "en-US", "es", "proj")

    def test_blank_transcripts(self):
        recognizer = FakeRecognizer(make_results(["", "  "]))

        with pytest.raises(NoTranscriptError):
            make_adapter(recognizer).process(AUDIO, "en-US", "es", "proj")

    def test_translation_failure(self):
        adapter = make_adapter(translator=FakeTranslator(error=TranslationFailedError("denied")))

        with pytest.raises(TranslationFailedError):
            adapter.process(AUDIO, "en-US", "es", "proj")

    def test_unexpected_translator_exception_is_wrapped(self):
        adapter = make_adapter(translator=FakeTranslator(error=TimeoutError("slow")))

        with pytest.raises(TranslationFailedError):
            adapter.process(AUDIO, "en-US", "es", "proj")

    def test_zero_translations(self):
        adapter = make_adapter(translator=FakeTranslator(translations=[]))

        with pytest.raises(NoTranslationError):
            adapter.process(AUDIO, "en-US", "es", "proj")
