"""Shared console and logging helpers for nestgen.

All user-facing output goes through the module-level Rich ``console``;
diagnostics go through :mod:`logging`, rendered by Rich's handler once
:func:`configure_logging` has run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from nestgen.scaffolder.models import WriteOutcome, WriteStatus

console = Console()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route the ``nestgen`` loggers through Rich.

    WARNING and above are shown by default; *verbose* lowers the threshold
    to DEBUG.
    """
    logger = logging.getLogger("nestgen")
    logger.handlers.clear()
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

MODE_COLORS: dict[str, str] = {
    "jwt": "bright_blue",
    "crud": "bright_green",
    "all": "bright_magenta",
}


def print_banner(mode: str, title: str) -> None:
    """Print a full-width rule announcing what is being generated."""
    color = MODE_COLORS.get(mode, "white")
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_outcomes(outcomes: Iterable[WriteOutcome], base: Path | None = None) -> None:
    """Print one line per written or skipped file."""
    for outcome in outcomes:
        shown = escape(_display_path(outcome.path, base))
        if outcome.status is WriteStatus.CREATED:
            console.print(f"[green]Created[/green] {shown}")
        else:
            console.print(f"[yellow]Skipped[/yellow] {shown} ({outcome.reason})")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a cyan informational message."""
    console.print(f"[cyan]{message}[/cyan]")


def _display_path(path: Path, base: Path | None) -> str:
    if base is not None:
        try:
            return str(path.relative_to(base))
        except ValueError:
            pass
    return str(path)
