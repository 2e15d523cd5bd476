"""Delay policies for the poll loop."""

from abc import ABC, abstractmethod
from typing import Optional

DEFAULT_POLL_INTERVAL = 5.0

class RetryPolicy(ABC):
    """Decides how long the poll loop waits before its next cycle."""

    @abstractmethod
    def next_delay(self, error: Optional[BaseException]) -> float:
        """
        Returns the delay in seconds before the next cycle.

        Args:
            error: The exception that ended the last cycle, or None if it
                   finished cleanly.
        """
        pass

class FixedDelayPolicy(RetryPolicy):
    """Waits the same interval after every cycle, failed or not."""

    def __init__(self, interval: float = DEFAULT_POLL_INTERVAL):
        if interval < 0:
            raise ValueError(f"interval cannot be negative, got {interval}")
        self.interval = interval

    def next_delay(self, error: Optional[BaseException]) -> float:
        return self.interval
