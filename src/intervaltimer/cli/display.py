"""Terminal rendering of the timer: one redrawn, phase-colored line."""

from __future__ import annotations

import click

_STYLES: dict[str, dict[str, object]] = {
    "idle": {"dim": True},
    "running": {"fg": "green", "bold": True},
    "alerting": {"fg": "red", "bold": True},
    "paused": {"fg": "blue"},
}


class TerminalDisplay:
    """Draws the timer's text on a single terminal line using Click styles.

    Only one style tag is active at a time; applying a new tag replaces the
    previous one and redraws the current text.  Each redraw blanks whatever a
    longer earlier text left on the line.
    """

    def __init__(self, width: int = 12) -> None:
        self._width = width
        self._tag: str | None = None
        self._text: str = ""
        # widest line drawn so far; shorter redraws are padded to cover it
        self._drawn = width

    @property
    def tag(self) -> str | None:
        return self._tag

    @property
    def text(self) -> str:
        return self._text

    def set_phase_style(self, tag: str) -> None:
        if tag not in _STYLES:
            raise ValueError(f"unknown style tag: {tag!r}")
        self._tag = tag
        self._render()

    def set_text(self, value: str) -> None:
        self._text = value
        self._render()

    def finish(self) -> None:
        """Move the cursor off the timer line."""
        click.echo()

    def _render(self) -> None:
        styles = _STYLES.get(self._tag or "idle", {})
        text = self._text.center(self._width)
        self._drawn = max(self._drawn, len(text))
        line = click.style(text, **styles) + " " * (self._drawn - len(text))
        click.echo(f"\r{line}", nl=False)
