"""Elapsed-time accumulator for a game.

The clock does not run by itself: a front-end calls tick() on its own
schedule (once a second in the terminal and web UIs) and reads the result.
Pausing folds the running span into the accumulated total, so resuming after
an undo continues from where the game stopped instead of from zero.
"""
import time
from typing import Callable, Optional


class GameClock:
    def __init__(self, now: Callable[[], float] = time.monotonic):
        self._now = now
        self._accumulated = 0.0
        self._started: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started is not None

    def start(self):
        """Reset to zero and start running."""
        self._accumulated = 0.0
        self._started = self._now()

    def pause(self):
        if self._started is not None:
            self._accumulated += self._now() - self._started
            self._started = None

    def resume(self):
        if self._started is None:
            self._started = self._now()

    def reset(self):
        self._accumulated = 0.0
        self._started = None

    def tick(self) -> int:
        """Whole seconds elapsed so far."""
        total = self._accumulated
        if self._started is not None:
            total += self._now() - self._started
        return int(total)
