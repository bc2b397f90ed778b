"""Rich Console factory and theme for bundlevalley output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BV_THEME = Theme(
    {
        "bv.ok": "bold green",
        "bv.error": "bold red",
        "bv.warning": "bold yellow",
        "bv.op": "bold cyan",
        "bv.key": "dim",
        "bv.id": "bold blue",
        "bv.room": "magenta",
        "bv.bundle": "bold",
        "bv.quality": "yellow",
        "bv.status.missing": "dim",
        "bv.status.collected": "blue",
        "bv.status.delivered": "green",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "missing": "bv.status.missing",
    "collected": "bv.status.collected",
    "delivered": "bv.status.delivered",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=BV_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an item status."""
    return _STATUS_STYLES.get(status, "")
