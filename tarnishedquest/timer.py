"""A pausable millisecond stopwatch."""

from __future__ import annotations

import time
from typing import Callable


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Stopwatch measuring elapsed milliseconds of a clock, with pause support."""

    def __init__(self, clock: Callable[[], int] = _monotonic_ms) -> None:
        self._clock = clock
        self._start_ticks = 0
        self._paused_ticks = 0
        self._paused = False
        self._started = False

    def start(self) -> None:
        """Start the timer; does nothing if it is already running."""
        if not self._started:
            self._started = True
            self._paused = False
            self._start_ticks = self._clock()
            self._paused_ticks = 0

    def stop(self) -> None:
        """Stop the timer and clear its time."""
        self._started = False
        self._paused = False
        self._start_ticks = 0
        self._paused_ticks = 0

    def pause(self) -> None:
        """Freeze the elapsed time if the timer is running."""
        if self._started and not self._paused:
            self._paused = True
            self._paused_ticks = self._clock() - self._start_ticks
            self._start_ticks = 0

    def unpause(self) -> None:
        """Resume counting from the frozen elapsed time."""
        if self._started and self._paused:
            self._paused = False
            self._start_ticks = self._clock() - self._paused_ticks
            self._paused_ticks = 0

    def ticks(self) -> int:
        """Return the elapsed milliseconds, or 0 when stopped."""
        if not self._started:
            return 0
        if self._paused:
            return self._paused_ticks
        return self._clock() - self._start_ticks

    def is_started(self) -> bool:
        return self._started

    def is_paused(self) -> bool:
        return self._paused and self._started