"""Tests for the terminal display."""

import click
import pytest

from intervaltimer.cli.display import TerminalDisplay


def _render(capsys: pytest.CaptureFixture[str]) -> str:
    return click.unstyle(capsys.readouterr().out)


class TestTerminalDisplay:
    """TerminalDisplay redraws one line and keeps a single style tag."""

    def test_set_text_redraws_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        display = TerminalDisplay(width=6)
        display.set_text("9.5")
        out = _render(capsys)
        assert out.startswith("\r")
        assert "9.5" in out
        assert "\n" not in out

    def test_new_tag_replaces_previous(self) -> None:
        display = TerminalDisplay()
        display.set_phase_style("running")
        display.set_phase_style("alerting")
        assert display.tag == "alerting"

    def test_text_kept_across_restyle(self, capsys: pytest.CaptureFixture[str]) -> None:
        display = TerminalDisplay()
        display.set_text("next")
        display.set_phase_style("paused")
        assert display.text == "next"
        assert _render(capsys).count("next") == 2

    def test_unknown_tag_rejected(self) -> None:
        display = TerminalDisplay()
        with pytest.raises(ValueError):
            display.set_phase_style("blinking")

    def test_finish_ends_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        TerminalDisplay().finish()
        assert capsys.readouterr().out == "\n"

    def test_short_text_blanks_longer_previous_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        display = TerminalDisplay(width=12)
        display.set_text("take a long rest now")
        display.set_text("10.0")
        last = _render(capsys).split("\r")[-1]
        assert len(last) == len("take a long rest now")
        assert last.strip() == "10.0"
