"""Orchestrates the live captioning poll loop."""

import logging
import threading
from collections import Counter
from typing import Optional

from .segment_locator import SegmentLocator
from .audio_extractor import AudioExtractor
from .dedup_tracker import DedupTracker
from .adapter import TranscriptionTranslationAdapter
from .caption_timeline import CaptionTimeline
from .retry_policy import RetryPolicy, FixedDelayPolicy
from .models import CycleOutcome
from .exceptions import LiveSubError, WriteFailedError

logger = logging.getLogger(__name__)

class LiveCaptionGenerator:
    """
    Polls an HLS playlist and appends a translated caption per new segment.

    Each cycle locates the newest segment, extracts its audio, skips it if the
    audio was already captioned, then transcribes, translates, appends and
    rewrites the subtitle track. The dedup set and caption timeline are only
    touched once translation has succeeded, so a failed cycle changes nothing
    and the same audio is tried again on the next one.
    """

    def __init__(
        self,
        locator: SegmentLocator,
        audio_extractor: AudioExtractor,
        dedup_tracker: DedupTracker,
        adapter: TranscriptionTranslationAdapter,
        timeline: CaptionTimeline,
        source_language: str,
        target_language: str,
        project_id: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None
    ):
        """
        Initializes the LiveCaptionGenerator.

        Args:
            locator: Finds the newest segment in the playlist.
            audio_extractor: Produces raw PCM audio for a segment.
            dedup_tracker: Remembers audio that was already captioned.
            adapter: Recognizes and translates audio.
            timeline: Caption lines and the subtitle file they are written to.
            source_language: Language spoken in the stream.
            target_language: Language captions are translated into.
            project_id: Cloud project passed to the translator.
            retry_policy: Decides the wait between cycles. Defaults to a fixed 5 seconds.
        """
        self.locator = locator
        self.audio_extractor = audio_extractor
        self.dedup_tracker = dedup_tracker
        self.adapter = adapter
        self.timeline = timeline
        self.source_language = source_language
        self.target_language = target_language
        self.project_id = project_id
        self.retry_policy = retry_policy or FixedDelayPolicy()
        self._stop_event = threading.Event()

    def run_cycle(self) -> CycleOutcome:
        """
        Runs one locate-extract-dedup-translate-append pass.

        Returns:
            CycleOutcome.PROCESSED if a caption was appended, or
            CycleOutcome.DUPLICATE if the segment's audio was seen before.

        Raises:
            LiveSubError: Whatever pipeline stage failed first. A failed
                          subtitle write is logged instead of raised.
        """
        segment = self.locator.locate()
        audio = self.audio_extractor.extract(segment.path)

        segment_hash = self.dedup_tracker.fingerprint(audio)
        if self.dedup_tracker.seen(segment_hash):
            logger.info(f"Segment {segment.name} already processed, skipping")
            return CycleOutcome.DUPLICATE

        translated_text = self.adapter.process(
            audio, self.source_language, self.target_language, self.project_id
        )

        index = self.timeline.append(translated_text)
        self.dedup_tracker.record(segment_hash)
        logger.info(f"Added caption #{index} for segment {segment.name}")

        try:
            self.timeline.save()
        except WriteFailedError as e:
            logger.error(f"Error creating subtitles: {e}")

        return CycleOutcome.PROCESSED

    def run(self, max_cycles: Optional[int] = None) -> Counter:
        """
        Runs cycles until stopped, retrying after every failure.

        Args:
            max_cycles: Stop after this many cycles. None runs until stop() is called.

        Returns:
            A Counter of CycleOutcome values for the cycles that ran.
        """
        outcomes = Counter()
        cycles = 0
        logger.info(
            f"--- Starting live captioning ({self.source_language} -> {self.target_language}), "
            f"subtitles at {self.timeline.output_path} ---"
        )
        while not self._stop_event.is_set():
            error = None
            try:
                outcome = self.run_cycle()
            except LiveSubError as e:
                error = e
                outcome = CycleOutcome.FAILED
                logger.error(f"Cycle failed ({type(e).__name__}): {e}")
            except Exception as e:
                error = e
                outcome = CycleOutcome.FAILED
                logger.error(f"Unexpected error during cycle: {e}", exc_info=True)

            outcomes[outcome] += 1
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break

            delay = self.retry_policy.next_delay(error)
            if delay > 0:
                self._stop_event.wait(delay)

        logger.info(
            f"--- Live captioning stopped after {cycles} cycles: "
            f"{outcomes[CycleOutcome.PROCESSED]} processed, "
            f"{outcomes[CycleOutcome.DUPLICATE]} duplicates, "
            f"{outcomes[CycleOutcome.FAILED]} failed ---"
        )
        return outcomes

    def stop(self) -> None:
        """Asks the loop to exit at its next wait."""
        self._stop_event.set()
