"""Data models for LiveSub."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

@dataclass(frozen=True)
class SegmentReference:
    """A manifest entry resolved against the segment directory."""
    name: str
    path: str

@dataclass
class RecognitionAlternative:
    """One candidate transcript for a stretch of speech."""
    transcript: str
    confidence: Optional[float] = None

@dataclass
class RecognitionResult:
    """A recognized stretch of speech with its ordered alternatives."""
    alternatives: List[RecognitionAlternative] = field(default_factory=list)

@dataclass
class CaptionCue:
    """Represents a single timed caption block."""
    start_time: float
    end_time: float
    text: str

class CycleOutcome(Enum):
    """How a single poll cycle ended."""
    PROCESSED = "processed"
    DUPLICATE = "duplicate"
    FAILED = "failed"
