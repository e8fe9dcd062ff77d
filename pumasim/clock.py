"""Frame timer that averages frames-per-second over a sliding window."""

from __future__ import annotations

import time
from typing import Callable


class FPSClock:
    """Measures time between frames and the average FPS over the last samples.

    ``timer`` returns a tick count and ``frequency`` is the number of ticks
    per second. The window holds ``2 ** log2_samples`` frame durations.
    """

    def __init__(
        self,
        log2_samples: int = 6,
        timer: Callable[[], int] = time.perf_counter_ns,
        frequency: int = 1_000_000_000,
    ):
        if log2_samples < 0:
            raise ValueError("log2_samples must not be negative")
        if frequency <= 0:
            raise ValueError("frequency must be positive")
        self._timer = timer
        self._frequency = frequency
        self._samples = [0] * (1 << log2_samples)
        self._mask = len(self._samples) - 1
        self._total = 0
        self._index = 0
        self._last_ticks = timer()

    @property
    def n_samples(self) -> int:
        return len(self._samples)

    def query(self) -> float:
        """Record a frame and return its duration in seconds."""
        now = self._timer()
        self._index = (self._index + 1) & self._mask
        self._total -= self._samples[self._index]
        self._samples[self._index] = now - self._last_ticks
        self._total += self._samples[self._index]
        self._last_ticks = now
        return self.frame_time

    @property
    def frame_time(self) -> float:
        """Seconds between the last two queries."""
        return self.frame_ticks / self._frequency

    @property
    def frame_ticks(self) -> int:
        """Timer ticks between the last two queries."""
        return self._samples[self._index]

    @property
    def fps(self) -> float:
        """Average frames per second over the sample window."""
        if self._total == 0:
            return float("inf")
        return self.n_samples * self._frequency / self._total