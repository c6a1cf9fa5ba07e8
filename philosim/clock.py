"""Millisecond clock measured from the start of a simulation."""

from __future__ import annotations

import time

_POLL_SECONDS = 50e-6


class Clock:
    """Reports time elapsed since creation, in milliseconds."""

    def __init__(self) -> None:
        self._start = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Milliseconds elapsed since the clock was created."""
        return (time.perf_counter() - self._start) * 1000.0

    def sleep_ms(self, amount: float) -> None:
        """Sleep for at least ``amount`` milliseconds, polling in short steps."""
        began = self.elapsed_ms()
        while self.elapsed_ms() - began < amount:
            time.sleep(_POLL_SECONDS)