"""Tests for DedupTracker."""

import hashlib
import threading

import pytest

from livesub.dedup_tracker import DedupTracker


class TestFingerprint:

    def test_deterministic(self):
        tracker = DedupTracker()
        audio = bytes(range(256)) * 4

        assert tracker.fingerprint(audio) == tracker.fingerprint(bytes(audio))

    def test_different_content_differs(self):
        tracker = DedupTracker()

        assert tracker.fingerprint(b"\x00\x01") != tracker.fingerprint(b"\x01\x00")

    def test_is_sha256_hex_by_default(self):
        assert DedupTracker().fingerprint(b"abc") == hashlib.sha256(b"abc").hexdigest()

    def test_configurable_algorithm(self):
        assert DedupTracker("md5").fingerprint(b"abc") == hashlib.md5(b"abc").hexdigest()

    @pytest.mark.parametrize("algorithm", ["not-a-hash", "shake_128"])
    def test_rejects_unusable_algorithm(self, algorithm):
        with pytest.raises(ValueError):
            DedupTracker(algorithm)


class TestSeenSet:

    def test_unseen_until_recorded(self):
        tracker = DedupTracker()
        fingerprint = tracker.fingerprint(b"segment")

        assert tracker.seen(fingerprint) is False
        tracker.record(fingerprint)
        assert tracker.seen(fingerprint) is True
        assert fingerprint in tracker

    def test_never_evicts(self):
        tracker = DedupTracker()
        first = tracker.fingerprint(b"first")
        tracker.record(first)

        for i in range(1000):
            tracker.record(tracker.fingerprint(str(i).encode()))

        assert tracker.seen(first)
        assert len(tracker) == 1001

    def test_recording_twice_is_idempotent(self):
        tracker = DedupTracker()
        tracker.record("abc")
        tracker.record("abc")

        assert len(tracker) == 1

    def test_concurrent_records(self):
        tracker = DedupTracker()

        def worker(offset):
            for i in range(200):
                tracker.record(f"{offset}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(tracker) == 8 * 200
