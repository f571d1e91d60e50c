"""Timer settings: the three durations a cycle is started with."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from intervaltimer.core.presets import Preset

logger = logging.getLogger(__name__)

DEFAULT_COUNTDOWN_DURATION = 120
DEFAULT_ALERT_DURATION = 10
DEFAULT_PAUSE_DURATION = 5
DEFAULT_PAUSE_MESSAGE = "next"

# Beats per repetition used when deriving a countdown from a tempo.
DEFAULT_TEMPO_RATE = 8


class InvalidSettingsError(Exception):
    """Raised when a duration field is missing, non-numeric or out of range."""


def _parse_field(name: str, raw: str) -> float:
    """Parse the text of a duration field into seconds."""
    try:
        return float(raw.strip())
    except (AttributeError, ValueError):
        raise InvalidSettingsError(f"{name} must be a number, got {raw!r}") from None


def tempo_duration(tempo: float, repetitions: int, rate: float = DEFAULT_TEMPO_RATE) -> int:
    """Return the countdown (seconds) for *repetitions* at *tempo* beats per minute.

    Each repetition takes *rate* beats, so the result is
    ``60 / tempo * rate * repetitions`` rounded to the nearest second, halves
    rounding up.
    """
    if tempo <= 0:
        raise InvalidSettingsError(f"tempo must be positive, got {tempo}")
    if repetitions <= 0:
        raise InvalidSettingsError(f"repetitions must be positive, got {repetitions}")
    if rate <= 0:
        raise InvalidSettingsError(f"rate must be positive, got {rate}")
    return math.floor(60 / tempo * rate * repetitions + 0.5)


@dataclass
class TimerSettings:
    """Editable durations, in seconds, for the next cycle."""

    countdown_duration: float = DEFAULT_COUNTDOWN_DURATION
    alert_duration: float = DEFAULT_ALERT_DURATION
    pause_duration: float = DEFAULT_PAUSE_DURATION

    @classmethod
    def from_fields(cls, countdown: str, alert: str, pause: str) -> TimerSettings:
        """Build settings from raw text fields."""
        return cls(
            countdown_duration=_parse_field("countdown duration", countdown),
            alert_duration=_parse_field("alert duration", alert),
            pause_duration=_parse_field("pause duration", pause),
        )

    def apply_preset(self, preset: Preset) -> None:
        """Copy the preset's durations verbatim."""
        self.countdown_duration = preset.countdown_duration
        self.alert_duration = preset.alert_duration
        self.pause_duration = preset.pause_duration

    def apply_tempo(self, tempo: float, repetitions: int, rate: float = DEFAULT_TEMPO_RATE) -> None:
        """Derive the countdown duration from a tempo and repetition count."""
        self.countdown_duration = tempo_duration(tempo, repetitions, rate)

    def validate(self) -> None:
        """Raise ``InvalidSettingsError`` unless every duration is usable."""
        if not self.countdown_duration > 0:
            raise InvalidSettingsError(
                f"countdown duration must be positive, got {self.countdown_duration}"
            )
        if not self.alert_duration >= 0:
            raise InvalidSettingsError(
                f"alert duration must not be negative, got {self.alert_duration}"
            )
        if not self.pause_duration > 0:
            raise InvalidSettingsError(
                f"pause duration must be positive, got {self.pause_duration}"
            )
        if self.alert_duration > self.countdown_duration:
            logger.warning(
                "alert duration %s exceeds countdown duration %s; every repetition starts alerting",
                self.alert_duration,
                self.countdown_duration,
            )
