"""Rich console used by the human-readable renderers.

Renderers draw into an in-memory console and hand back plain text, so
``format_result`` stays a pure ``ServiceResult -> str`` function and the
caller decides where the text goes. Rich drops color codes on its own
when the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

INICONF_THEME = Theme(
    {
        "ini.ok": "bold green",
        "ini.error": "bold red",
        "ini.warning": "bold yellow",
        "ini.op": "bold cyan",
        "ini.key": "dim",
        "ini.section": "bold blue",
        "ini.name": "bold",
        "ini.value": "green",
        "ini.line": "dim",
    }
)


def create_console(width: int = DEFAULT_WIDTH) -> Console:
    """New console writing to a private buffer; read it back with :func:`get_output`."""
    return Console(file=StringIO(), theme=INICONF_THEME, highlight=False, width=width)


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
