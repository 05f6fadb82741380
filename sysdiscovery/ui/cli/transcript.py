"""
Click transcript renderer — colored discovery narration on stdout.
"""

from __future__ import annotations

import click

from sysdiscovery.core.observability.transcript import Transcript

_STYLES: dict[str, dict] = {
    "banner": {"fg": "magenta", "bold": True},
    "heading": {"fg": "green", "bold": True},
    "detail": {"fg": "blue", "bold": True},
    "command": {"fg": "cyan", "bold": True},
    "attempt": {"fg": "yellow", "bold": True},
    "success": {"fg": "green", "bold": True},
    "warning": {"fg": "yellow", "bold": True},
    "failure": {"fg": "red", "bold": True},
}


class ClickTranscript(Transcript):
    """Render transcript events with ``click.secho``.

    Color is stripped automatically when stdout is not a terminal.
    """

    def __init__(self, color: bool | None = None) -> None:
        self._color = color

    def emit(self, kind: str, message: str) -> None:
        style = _STYLES.get(kind)
        if style is None:
            click.echo(message, color=self._color)
            return
        click.secho(message, color=self._color, **style)
