"""CLI entry point for intervaltimer.

Uses Click to expose the ``intervaltimer`` command group: ``run`` drives a
repeating countdown in the terminal until interrupted, ``presets`` lists the
configured duration presets.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, TypeVar

import click

import intervaltimer
from intervaltimer.cli.display import TerminalDisplay
from intervaltimer.core.presets import Preset, PresetError, find_preset, load_presets
from intervaltimer.core.scheduler import LoopScheduler
from intervaltimer.core.settings import (
    DEFAULT_PAUSE_MESSAGE,
    DEFAULT_TEMPO_RATE,
    InvalidSettingsError,
    TimerSettings,
)
from intervaltimer.core.timer import DEFAULT_SAMPLE_INTERVAL, Timer

T = TypeVar("T")

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}

_presets_file_option = click.option(
    "--presets-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="INTERVALTIMER_PRESETS",
    default=None,
    help="JSON document with named presets.",
)


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting ``InvalidSettingsError`` to a CLI error.

    On ``InvalidSettingsError`` the message is printed to stderr and the
    process exits with code 1.
    """
    try:
        return action()
    except InvalidSettingsError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _load_presets(path: Path | None) -> list[Preset]:
    """Load presets, reporting a failure as a warning and carrying on without them."""
    try:
        return load_presets(path)
    except PresetError as exc:
        click.echo(f"Warning: {exc}", err=True)
        return []


def _merge_fields(
    settings: TimerSettings, countdown: str | None, alert: str | None, pause: str | None
) -> TimerSettings:
    """Parse the duration fields given on the command line over *settings*."""
    return TimerSettings.from_fields(
        countdown if countdown is not None else str(settings.countdown_duration),
        alert if alert is not None else str(settings.alert_duration),
        pause if pause is not None else str(settings.pause_duration),
    )


@click.group()
@click.version_option(version=intervaltimer.__version__, prog_name="intervaltimer")
@click.option("-v", "--verbose", count=True, help="Log more (repeat for debug output).")
def cli(verbose: int) -> None:
    """intervaltimer: a repeating countdown for interval training."""
    if not verbose:
        return
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.option("--countdown", default=None, help="Countdown duration in seconds.")
@click.option("--alert", default=None, help="Trailing alert window in seconds.")
@click.option("--pause", default=None, help="Pause between repetitions in seconds.")
@click.option("--message", default=DEFAULT_PAUSE_MESSAGE, show_default=True, help="Text shown during the pause.")
@click.option("--preset", "preset_name", default=None, help="Start from a named preset.")
@click.option("--tempo", type=float, default=None, help="Tempo in beats per minute.")
@click.option("--reps", type=int, default=None, help="Repetitions per countdown (with --tempo).")
@click.option("--rate", type=float, default=DEFAULT_TEMPO_RATE, show_default=True, help="Beats per repetition.")
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_SAMPLE_INTERVAL,
    show_default=True,
    help="Sampling cadence in seconds.",
)
@_presets_file_option
def run(
    countdown: str | None,
    alert: str | None,
    pause: str | None,
    message: str,
    preset_name: str | None,
    tempo: float | None,
    reps: int | None,
    rate: float,
    interval: float,
    presets_file: Path | None,
) -> None:
    """Run the countdown, alert and pause cycle until interrupted with Ctrl-C."""
    settings = TimerSettings()

    if preset_name is not None:
        preset = find_preset(_load_presets(presets_file), preset_name)
        if preset is None:
            click.echo(f"Unknown preset: {preset_name}", err=True)
            sys.exit(1)
        settings.apply_preset(preset)

    if (tempo is None) != (reps is None):
        click.echo("--tempo and --reps must be given together", err=True)
        sys.exit(1)
    if tempo is not None and reps is not None:
        _run(lambda: settings.apply_tempo(tempo, reps, rate))

    fields = _run(lambda: _merge_fields(settings, countdown, alert, pause))
    _run(fields.validate)

    display = TerminalDisplay()
    scheduler = LoopScheduler()
    timer = Timer(display, scheduler, pause_message=message, sample_interval=interval)
    timer.start(fields.countdown_duration, fields.alert_duration, fields.pause_duration)
    try:
        scheduler.run()
    except KeyboardInterrupt:
        timer.stop()
    finally:
        display.finish()


@cli.command()
@_presets_file_option
def presets(presets_file: Path | None) -> None:
    """List the configured presets."""
    loaded = _load_presets(presets_file)
    if not loaded:
        click.echo("No presets configured")
        return
    for preset in loaded:
        click.echo(
            f"{preset.name}: countdown {preset.countdown_duration}s, "
            f"alert {preset.alert_duration}s, pause {preset.pause_duration}s"
        )
