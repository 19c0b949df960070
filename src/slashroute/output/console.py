"""Rich console plumbing for CLI output.

Renderers draw onto a Console backed by a StringIO buffer and hand the
text back as a string, so ``format_result`` stays a pure ``-> str``
function. Rich drops colour on its own when the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from slashroute.domain.callbacks import CORE_EVENTS

SLASHROUTE_THEME = Theme(
    {
        "sr.ok": "bold green",
        "sr.error": "bold red",
        "sr.warning": "bold yellow",
        "sr.op": "bold cyan",
        "sr.key": "dim",
        "sr.event": "green",
        "sr.core": "bold green",
        "sr.category": "blue",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int = DEFAULT_WIDTH) -> Console:
    return Console(
        file=StringIO(),
        theme=SLASHROUTE_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )


def get_output(console: Console) -> str:
    """Everything written to a console made by :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console is not backed by a StringIO buffer"
        raise TypeError(msg)
    return buffer.getvalue()


def event_text(event: str) -> Text:
    """An event name, core events highlighted."""
    return Text(event, style="sr.core" if event in CORE_EVENTS else "sr.event")
