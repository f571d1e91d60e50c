"""Timer core — a repeating countdown state machine driven by a scheduler."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Protocol

from intervaltimer.core.settings import (
    DEFAULT_ALERT_DURATION,
    DEFAULT_COUNTDOWN_DURATION,
    DEFAULT_PAUSE_DURATION,
    DEFAULT_PAUSE_MESSAGE,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "———"
DEFAULT_SAMPLE_INTERVAL = 0.01


class TimerState(Enum):
    """Possible states of the timer.

    Each value doubles as the display style tag for that phase.
    """

    IDLE = "idle"
    RUNNING = "running"
    ALERTING = "alerting"
    PAUSED = "paused"


class Display(Protocol):
    """Sink for the timer's style and text updates."""

    def set_phase_style(self, tag: str) -> None: ...

    def set_text(self, value: str) -> None: ...


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Registers a callback to run every *interval* seconds."""

    def every(self, interval: float, callback: Callable[[], None]) -> Cancellable: ...


def style_tag(state: TimerState) -> str:
    """Return the display style tag for *state*."""
    return state.value


def _format_seconds(seconds: float) -> str:
    """Format *seconds* with one decimal place."""
    return f"{seconds:.1f}"


class Timer:
    """A countdown that alerts, pauses and repeats until stopped.

    Remaining time is always derived from ``time.monotonic()`` relative to
    the epoch of the current phase, so sampling jitter never accumulates.
    The timer does no I/O of its own: every update goes through the injected
    *display*, and sampling is driven by the injected *scheduler*.
    """

    def __init__(
        self,
        display: Display,
        scheduler: Scheduler,
        countdown_duration: float = DEFAULT_COUNTDOWN_DURATION,
        alert_duration: float = DEFAULT_ALERT_DURATION,
        pause_duration: float = DEFAULT_PAUSE_DURATION,
        pause_message: str = DEFAULT_PAUSE_MESSAGE,
        sample_interval: float = DEFAULT_SAMPLE_INTERVAL,
    ) -> None:
        if sample_interval <= 0:
            raise ValueError(f"sample_interval must be positive, got {sample_interval}")
        self._display = display
        self._scheduler = scheduler
        self._countdown_duration: float = countdown_duration
        self._alert_duration: float = alert_duration
        self._pause_duration: float = pause_duration
        self._pause_message: str = pause_message
        self._sample_interval: float = sample_interval
        self._state: TimerState = TimerState.IDLE
        self._start_time: float | None = None
        self._scheduled: Cancellable | None = None

    # -- public interface ----------------------------------------------------

    def start(self, countdown_duration: float, alert_duration: float, pause_duration: float) -> None:
        """Begin the repeating cycle with the given durations (seconds).

        Does nothing unless the timer is IDLE; an active cycle keeps its clock
        and durations.
        """
        if self._state != TimerState.IDLE:
            logger.debug("start() ignored while %s", self._state.value)
            return

        # Register first so a failed registration leaves the timer IDLE.
        self._scheduled = self._scheduler.every(self._sample_interval, self.tick)
        self._countdown_duration = countdown_duration
        self._alert_duration = alert_duration
        self._pause_duration = pause_duration
        self._start_time = time.monotonic()
        self._set_state(TimerState.RUNNING)
        logger.info(
            "Timer started: countdown=%ss alert=%ss pause=%ss",
            countdown_duration,
            alert_duration,
            pause_duration,
        )

    def stop(self) -> None:
        """Cancel the cycle and return to IDLE.  Does nothing when IDLE."""
        if self._state == TimerState.IDLE:
            return

        if self._scheduled is not None:
            self._scheduled.cancel()
        self._scheduled = None
        self._start_time = None
        self._set_state(TimerState.IDLE)
        self._display.set_text(PLACEHOLDER_TEXT)
        logger.info("Timer stopped")

    def tick(self) -> None:
        """Sample the clock and advance the phase if a threshold was reached."""
        if self._state == TimerState.IDLE or self._start_time is None:
            return

        seconds = time.monotonic() - self._start_time

        if self._state == TimerState.RUNNING:
            remaining = self._countdown_duration - seconds
            if remaining <= self._alert_duration:
                self._set_state(TimerState.ALERTING)
            else:
                self._display.set_text(_format_seconds(remaining))
        elif self._state == TimerState.ALERTING:
            remaining = self._countdown_duration - seconds
            if remaining <= 0:
                self._start_time = time.monotonic()
                self._set_state(TimerState.PAUSED)
                self._display.set_text(self._pause_message)
            else:
                self._display.set_text(_format_seconds(remaining))
        elif self._state == TimerState.PAUSED:
            remaining = self._pause_duration - seconds
            if remaining <= 0:
                self._start_time = time.monotonic()
                self._set_state(TimerState.RUNNING)
                self._display.set_text(_format_seconds(self._countdown_duration))

    def get_state(self) -> TimerState:
        """Return the current timer state."""
        return self._state

    def get_start_time(self) -> float | None:
        """Return the epoch of the current phase, or ``None`` when IDLE."""
        return self._start_time

    def is_scheduled(self) -> bool:
        """Return whether a sampling callback is currently registered."""
        return self._scheduled is not None

    @property
    def countdown_duration(self) -> float:
        return self._countdown_duration

    @property
    def alert_duration(self) -> float:
        return self._alert_duration

    @property
    def pause_duration(self) -> float:
        return self._pause_duration

    @property
    def pause_message(self) -> str:
        return self._pause_message

    # -- private helpers -----------------------------------------------------

    def _set_state(self, state: TimerState) -> None:
        """Enter *state* and restyle the display to match."""
        if state != self._state:
            logger.debug("Timer %s -> %s", self._state.value, state.value)
        self._state = state
        self._display.set_phase_style(style_tag(state))
