"""Shared fakes and fixtures for the LiveSub tests."""

import pytest

from livesub.audio_extractor import Transcoder
from livesub.models import RecognitionResult, RecognitionAlternative
from livesub.recognizer import Recognizer
from livesub.translator import Translator

TS_HEADER = bytes([0x47]) + bytes(187)


def make_results(*groups):
    """Builds recognition results: each group is a list of alternative transcripts."""
    return [
        RecognitionResult(alternatives=[RecognitionAlternative(transcript=t) for t in group])
        for group in groups
    ]


class FakeTranscoder(Transcoder):
    """Returns canned audio per segment path, or the same audio for every path."""

    def __init__(self, audio=b"\x01\x02" * 8, by_path=None, error=None):
        self.audio = audio
        self.by_path = by_path or {}
        self.error = error
        self.calls = []

    def extract_audio(self, container_path):
        self.calls.append(container_path)
        if self.error is not None:
            raise self.error
        return self.by_path.get(container_path, self.audio)


class FakeRecognizer(Recognizer):
    def __init__(self, results=None, error=None):
        self.results = results if results is not None else make_results(["hello"])
        self.error = error
        self.calls = []

    def recognize(self, audio, language_code, sample_rate):
        self.calls.append((audio, language_code, sample_rate))
        if self.error is not None:
            raise self.error
        return self.results


class FakeTranslator(Translator):
    """Echoes the transcript in upper case unless given canned translations."""

    def __init__(self, translations=None, error=None):
        self.translations = translations
        self.error = error
        self.calls = []

    def translate(self, text, source_lang, target_lang, project_id):
        self.calls.append((text, source_lang, target_lang, project_id))
        if self.error is not None:
            raise self.error
        if self.translations is not None:
            return self.translations
        return [text.upper()]


@pytest.fixture
def stream_dir(tmp_path):
    """A directory standing in for the HLS output folder."""
    directory = tmp_path / "stream_hls"
    directory.mkdir()
    return directory


@pytest.fixture
def write_manifest(stream_dir):
    def _write(*lines, name="stream.m3u8"):
        path = stream_dir / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_segment(stream_dir):
    def _write(name, content=TS_HEADER):
        path = stream_dir / name
        path.write_bytes(content)
        return path
    return _write
