"""Tests for the Google Cloud recognizer and translator with mocked clients."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import speech

from livesub.recognizer import GoogleSpeechRecognizer
from livesub.translator import GoogleTranslator
from livesub.exceptions import RecognitionFailedError, TranslationFailedError, ConfigurationError


def speech_response(*groups):
    return SimpleNamespace(results=[
        SimpleNamespace(alternatives=[SimpleNamespace(transcript=t, confidence=0.9) for t in group])
        for group in groups
    ])


class TestGoogleSpeechRecognizer:

    def test_builds_linear16_request(self):
        client = Mock()
        client.recognize.return_value = speech_response(["hello there"])
        recognizer = GoogleSpeechRecognizer(client=client)

        recognizer.recognize(b"\x01\x02", "en-US", 16000)

        kwargs = client.recognize.call_args.kwargs
        assert kwargs['config'].encoding == speech.RecognitionConfig.AudioEncoding.LINEAR16
        assert kwargs['config'].sample_rate_hertz == 16000
        assert kwargs['config'].language_code == "en-US"
        assert kwargs['audio'].content == b"\x01\x02"
        assert 'timeout' not in kwargs

    def test_passes_timeout(self):
        client = Mock()
        client.recognize.return_value = speech_response()

        GoogleSpeechRecognizer(client=client, timeout=30.0).recognize(b"\x01", "en-US", 16000)

        assert client.recognize.call_args.kwargs['timeout'] == 30.0

    def test_converts_results_in_order(self):
        client = Mock()
        client.recognize.return_value = speech_response(["a", "b"], ["c"])

        results = GoogleSpeechRecognizer(client=client).recognize(b"\x01", "en-US", 16000)

        assert [[alt.transcript for alt in r.alternatives] for r in results] == [["a", "b"], ["c"]]
        assert results[0].alternatives[0].confidence == 0.9

    def test_api_error_becomes_recognition_failed(self):
        client = Mock()
        client.recognize.side_effect = google_exceptions.ServiceUnavailable("down")

        with pytest.raises(RecognitionFailedError):
            GoogleSpeechRecognizer(client=client).recognize(b"\x01", "en-US", 16000)

    def test_client_from_credentials_file(self):
        with patch("livesub.recognizer.speech.SpeechClient.from_service_account_file") as factory:
            recognizer = GoogleSpeechRecognizer(credentials_file="credentials.json")

        factory.assert_called_once_with("credentials.json")
        assert recognizer.client is factory.return_value

    def test_client_creation_failure(self):
        with patch(
            "livesub.recognizer.speech.SpeechClient.from_service_account_file",
            side_effect=FileNotFoundError("credentials.json")
        ):
            with pytest.raises(ConfigurationError):
                GoogleSpeechRecognizer(credentials_file="credentials.json")


class TestGoogleTranslator:

    def test_request_shape(self):
        client = Mock()
        client.translate_text.return_value = SimpleNamespace(
            translations=[SimpleNamespace(translated_text="hola"), SimpleNamespace(translated_text="buenas")]
        )

        translations = GoogleTranslator(client=client).translate("hello", "en-US", "es", "my-project")

        assert translations == ["hola", "buenas"]
        request = client.translate_text.call_args.kwargs['request']
        assert request['parent'] == "projects/my-project/locations/global"
        assert request['contents'] == ["hello"]
        assert request['target_language_code'] == "es"
        assert 'source_language_code' not in request

    def test_empty_translations(self):
        client = Mock()
        client.translate_text.return_value = SimpleNamespace(translations=[])

        assert GoogleTranslator(client=client).translate("hello", "en-US", "es", "p") == []

    def test_api_error_becomes_translation_failed(self):
        client = Mock()
        client.translate_text.side_effect = google_exceptions.PermissionDenied("no")

        with pytest.raises(TranslationFailedError):
            GoogleTranslator(client=client).translate("hello", "en-US", "es", "p")

    def test_requires_project(self):
        client = Mock()

        with pytest.raises(TranslationFailedError):
            GoogleTranslator(client=client).translate("hello", "en-US", "es", None)
        client.translate_text.assert_not_called()

    def test_passes_timeout(self):
        client = Mock()
        client.translate_text.return_value = SimpleNamespace(translations=[])

        GoogleTranslator(client=client, timeout=12.5).translate("hello", "en-US", "es", "p")

        assert client.translate_text.call_args.kwargs['timeout'] == 12.5
