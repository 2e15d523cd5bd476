"""Content-based deduplication of extracted segment audio."""

import hashlib
import logging
import threading

logger = logging.getLogger(__name__)

class DedupTracker:
    """
    Remembers fingerprints of audio that has already been captioned.

    Fingerprints are digests of the audio bytes only, so a segment that
    reappears under a different filename is still recognized. Recorded
    fingerprints are kept for the life of the process.
    """

    def __init__(self, algorithm: str = "sha256"):
        # shake_* digests need an explicit length, so they are not accepted
        if algorithm not in hashlib.algorithms_available or algorithm.startswith("shake"):
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        self.algorithm = algorithm
        self._seen = set()
        self._lock = threading.Lock()

    def fingerprint(self, buffer: bytes) -> str:
        """Returns the hex digest of the buffer."""
        return hashlib.new(self.algorithm, buffer).hexdigest()

    def seen(self, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._seen

    def record(self, fingerprint: str) -> None:
        with self._lock:
            self._seen.add(fingerprint)
        logger.debug(f"Recorded segment fingerprint {fingerprint} ({len(self)} total)")

    def __contains__(self, fingerprint: str) -> bool:
        return self.seen(fingerprint)

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
