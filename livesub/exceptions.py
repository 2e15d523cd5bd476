"""Custom Exceptions for the LiveSub application."""

class LiveSubError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(LiveSubError):
    """Exception raised for errors in configuration loading or validation."""
    pass

class FileSystemError(LiveSubError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass


# --- Input unavailable ---

class InputUnavailableError(LiveSubError):
    """The manifest or a media segment could not be found or read."""
    pass

class ManifestUnavailableError(InputUnavailableError):
    """The playlist manifest could not be opened or read."""
    pass

class NoSegmentFoundError(InputUnavailableError):
    """The manifest contains no media segment entry."""
    pass

class SegmentNotFoundError(InputUnavailableError):
    """The segment referenced by the manifest is missing or unreadable."""
    pass


# --- Invalid format ---

class InvalidFormatError(LiveSubError):
    """Input data does not have the expected format."""
    pass

class InvalidContainerError(InvalidFormatError):
    """The segment does not start with the MPEG-TS sync byte."""
    pass


# --- External tool failure ---

class ExternalToolError(LiveSubError):
    """An external program failed to run or exited with an error."""
    pass

class TranscodeFailedError(ExternalToolError):
    """ffmpeg could not convert the segment to raw PCM audio."""
    pass


# --- Empty results ---

class EmptyResultError(LiveSubError):
    """A pipeline stage succeeded but produced nothing."""
    pass

class EmptyAudioError(EmptyResultError):
    """Audio extraction produced a zero-length buffer."""
    pass

class EmptyInputError(EmptyResultError):
    """An empty audio buffer was handed to the recognizer."""
    pass

class NoTranscriptError(EmptyResultError):
    """Recognition returned no usable transcript text."""
    pass

class NoTranslationError(EmptyResultError):
    """Translation returned no translations."""
    pass


# --- Service failures ---

class ServiceError(LiveSubError):
    """A recognition or translation engine call failed."""
    pass

class RecognitionFailedError(ServiceError):
    """Exception raised for errors during speech recognition."""
    pass

class TranslationFailedError(ServiceError):
    """Exception raised for errors during translation."""
    pass


# --- Output failures ---

class OutputError(LiveSubError):
    """Results could not be written out."""
    pass

class WriteFailedError(OutputError):
    """The subtitle document could not be written to its destination."""
    pass
