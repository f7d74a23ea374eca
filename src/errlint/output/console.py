"""Rich Console factory and theme for errlint output.

Consoles render to a StringIO buffer so formatters keep returning plain
strings. Under CliRunner and pipes Rich drops the color codes itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ERRLINT_THEME = Theme(
    {
        "errlint.ok": "bold green",
        "errlint.error": "bold red",
        "errlint.warning": "bold yellow",
        "errlint.op": "bold cyan",
        "errlint.key": "dim",
        "errlint.code": "bold magenta",
        "errlint.value": "bold blue",
        "errlint.location": "dim",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "errlint.error",
    "warning": "errlint.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ERRLINT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return _SEVERITY_STYLES.get(severity, "")
