"""Tests for the preset loader."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from intervaltimer.core.presets import (
    Preset,
    PresetError,
    default_presets_path,
    find_preset,
    load_presets,
)


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data))
    return path


# ---------------------------------------------------------------------------
# load_presets()
# ---------------------------------------------------------------------------


class TestLoadPresets:
    """load_presets() reads named duration triples from JSON."""

    def test_loads_presets_in_order(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "presets.json",
            {
                "presets": [
                    {"name": "sprints", "countdown_duration": 90, "alert_duration": 15, "pause_duration": 10},
                    {"name": "long", "countdown_duration": 300, "alert_duration": 30, "pause_duration": 60},
                ]
            },
        )
        assert load_presets(path) == [
            Preset("sprints", 90, 15, 10),
            Preset("long", 300, 30, 60),
        ]

    def test_values_are_kept_exactly(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "presets.json",
            {"presets": [{"name": "x", "countdown_duration": 90, "alert_duration": 15, "pause_duration": 10}]},
        )
        (preset,) = load_presets(path)
        assert (preset.countdown_duration, preset.alert_duration, preset.pause_duration) == (90, 15, 10)
        assert isinstance(preset.countdown_duration, int)

    def test_missing_document_yields_no_presets(self, tmp_path: Path) -> None:
        assert load_presets(tmp_path / "absent.json") == []

    def test_missing_collection_yields_no_presets(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "presets.json", {"theme": "dark"})
        assert load_presets(path) == []

    def test_default_path_is_used(self, tmp_path: Path) -> None:
        with patch("intervaltimer.core.presets.DEFAULT_CONFIG_DIR", tmp_path):
            assert default_presets_path() == tmp_path / "presets.json"
            assert load_presets() == []

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "presets.json"
        path.write_text("{not json")
        with pytest.raises(PresetError):
            load_presets(path)

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "an", "object"],
            {"presets": {"name": "x"}},
            {"presets": ["sprints"]},
            {"presets": [{"countdown_duration": 1, "alert_duration": 1, "pause_duration": 1}]},
            {"presets": [{"name": "x", "countdown_duration": "90", "alert_duration": 1, "pause_duration": 1}]},
            {"presets": [{"name": "x", "countdown_duration": 90, "alert_duration": True, "pause_duration": 1}]},
            {"presets": [{"name": "x", "countdown_duration": 90, "alert_duration": 1}]},
        ],
    )
    def test_malformed_document_raises(self, tmp_path: Path, data: object) -> None:
        path = _write(tmp_path / "presets.json", data)
        with pytest.raises(PresetError):
            load_presets(path)


# ---------------------------------------------------------------------------
# find_preset()
# ---------------------------------------------------------------------------


class TestFindPreset:
    """find_preset() matches names case-insensitively."""

    def test_finds_by_name(self) -> None:
        presets = [Preset("Sprints", 90, 15, 10), Preset("Long", 300, 30, 60)]
        assert find_preset(presets, "long") == presets[1]
        assert find_preset(presets, "SPRINTS") == presets[0]

    def test_unknown_name(self) -> None:
        assert find_preset([Preset("Sprints", 90, 15, 10)], "tabata") is None
        assert find_preset([], "anything") is None
