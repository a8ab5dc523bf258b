"""Shared utility functions for the module generator.

Provides Rich-based console reporting and a progress bar factory for the
generation stages.  Every public function is side-effect-free apart from console output.
"""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_info(message: str) -> None:
    """Print a plain informational line."""
    console.print(message, highlight=False)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(rows: list[tuple[str, str, str]], title: str = "Summary") -> None:
    """Print a three-column stage/path/outcome table.

    Args:
        rows: ``(stage, path, outcome)`` tuples, in the order they happened.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Stage", style="dim", no_wrap=True)
    table.add_column("Path")
    table.add_column("Outcome", no_wrap=True)

    for stage, path, outcome in rows:
        table.add_row(stage, path, outcome)

    console.print(table)


def create_progress(disable: bool = False) -> Progress:
    """Create a Rich progress bar configured for generation stages.

    Args:
        disable: Render nothing; used for quiet runs.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        disable=disable,
    )
