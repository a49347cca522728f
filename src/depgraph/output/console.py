"""Buffered rich Console for rendering results to a string.

Renderers draw into an in-memory console and hand back its text, so the
commands decide where output goes (stdout or stderr).  Rich drops colour
codes by itself when it is not attached to a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEPGRAPH_THEME = Theme(
    {
        "dg.ok": "bold green",
        "dg.error": "bold red",
        "dg.op": "bold cyan",
        "dg.key": "dim",
        "dg.node": "bold blue",
        "dg.cycle": "bold magenta",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """In-memory console with the depgraph theme; wide enough for long member lists."""
    return Console(
        file=StringIO(),
        theme=DEPGRAPH_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text drawn so far on a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("get_output() needs a console from create_console()")
    return buffer.getvalue()
