"""Preset loader for named duration triples stored in a JSON document."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "intervaltimer"
PRESETS_FILE = "presets.json"

_DURATION_KEYS = ("countdown_duration", "alert_duration", "pause_duration")


class PresetError(Exception):
    """Raised when the preset document cannot be read or parsed."""


@dataclass(frozen=True)
class Preset:
    """A named shortcut for the three timer durations."""

    name: str
    countdown_duration: float
    alert_duration: float
    pause_duration: float


def default_presets_path() -> Path:
    """Return the preset document location inside the config directory."""
    return DEFAULT_CONFIG_DIR / PRESETS_FILE


def _parse_preset(index: int, entry: object) -> Preset:
    if not isinstance(entry, dict):
        raise PresetError(f"preset #{index} must be an object")
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise PresetError(f"preset #{index} is missing a name")
    values = []
    for key in _DURATION_KEYS:
        value = entry.get(key)
        # bool is an int subclass but never a duration
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PresetError(f"preset {name!r}: {key} must be a number")
        values.append(value)
    return Preset(name, *values)


def load_presets(path: Path | None = None) -> list[Preset]:
    """Load presets from the JSON document at *path*.

    A missing document, or one without a ``presets`` collection, yields an
    empty list.  Unreadable or malformed documents raise :class:`PresetError`.
    """
    path = path if path is not None else default_presets_path()
    if not path.exists():
        logger.debug("No preset document at %s", path)
        return []

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load presets from %s: %s", path, exc)
        raise PresetError(f"could not load presets from {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise PresetError(f"{path}: expected a JSON object at the top level")
    entries = data.get("presets")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise PresetError(f"{path}: 'presets' must be a list")

    presets = [_parse_preset(i, entry) for i, entry in enumerate(entries)]
    logger.debug("Loaded %d presets from %s", len(presets), path)
    return presets


def find_preset(presets: list[Preset], name: str) -> Preset | None:
    """Return the preset called *name* (case-insensitive), or ``None``."""
    wanted = name.casefold()
    for preset in presets:
        if preset.name.casefold() == wanted:
            return preset
    return None
