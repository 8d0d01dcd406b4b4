"""Rich console plumbing for layerforge output.

Renderers draw onto a Console that writes into a private StringIO buffer
and the caller takes the text afterwards, so formatting stays a pure
``ServiceResult -> str`` step. Rich drops colour codes on its own when the
output is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

LAYERFORGE_THEME = Theme(
    {
        "lf.ok": "bold green",
        "lf.error": "bold red",
        "lf.op": "bold cyan",
        "lf.key": "dim",
        "lf.index": "bold blue",
        "lf.name": "bold",
        "lf.layer": "magenta",
        "lf.skip": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a Console writing into its own buffer.

    Args:
        no_color: Strip styles even on a terminal.
        width: Line width; tables wrap to it.
    """
    return Console(
        file=StringIO(),
        theme=LAYERFORGE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Return everything rendered so far on a :func:`create_console` console."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("get_output() needs a console from create_console()")
    return buffer.getvalue()
