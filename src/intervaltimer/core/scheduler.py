"""Cooperative single-threaded scheduler for recurring callbacks."""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a recurring callback registered with :class:`LoopScheduler`."""

    def __init__(self, interval: float, callback: Callable[[], None], due: float) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.due = due
        self.cancelled = False

    def cancel(self) -> None:
        """Stop the callback from firing again.  Safe to call repeatedly."""
        self.cancelled = True


class LoopScheduler:
    """Runs recurring callbacks one at a time on the calling thread.

    Callbacks fire at a fixed cadence: when the loop falls behind, missed
    slots are skipped rather than replayed in a burst.  :meth:`run` returns
    once every registration has been cancelled.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._calls: list[ScheduledCall] = []

    def every(self, interval: float, callback: Callable[[], None]) -> ScheduledCall:
        """Register *callback* to run every *interval* seconds."""
        call = ScheduledCall(interval, callback, self._clock() + interval)
        self._calls.append(call)
        return call

    def pending(self) -> int:
        """Return the number of live registrations."""
        return sum(1 for call in self._calls if not call.cancelled)

    def run_once(self) -> bool:
        """Wait for and fire the next due callback.

        Returns ``False`` when there is nothing left to run.
        """
        self._calls = [call for call in self._calls if not call.cancelled]
        if not self._calls:
            return False

        call = min(self._calls, key=lambda c: c.due)
        delay = call.due - self._clock()
        if delay > 0:
            self._sleep(delay)
        call.callback()

        now = self._clock()
        call.due += call.interval
        if call.due <= now:
            missed = int((now - call.due) // call.interval) + 1
            call.due += missed * call.interval
        return True

    def run(self) -> None:
        """Fire callbacks until no registrations remain."""
        logger.debug("Scheduler loop started with %d registrations", self.pending())
        while self.run_once():
            pass
        logger.debug("Scheduler loop finished")
