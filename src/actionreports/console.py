"""Rich console utilities for the actionreports CLI."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Shared console instances
console = Console()
error_console = Console(stderr=True)


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_success(message: str) -> None:
    """Print success message."""
    console.print(Panel(message, title="Success", border_style="green"))


def print_paths(title: str, paths: Sequence[Path]) -> None:
    """Print the report files an operation touched."""
    if not paths:
        console.print(f"[dim]{title}: none[/dim]")
        return
    console.print(f"\n[bold]{title}:[/bold]")
    for path in paths:
        console.print(f"  {path}")


def print_report_summary(
    path: Path,
    fmt: str,
    open_regions: Sequence[str],
    elements: int | None = None,
    sealed: bool | None = None,
    problem: str | None = None,
) -> None:
    """Print the state of one report file."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Report", str(path))
    table.add_row("Format", fmt)
    if elements is not None:
        table.add_row("Elements", str(elements))
    if sealed is not None:
        table.add_row("Sealed", "yes" if sealed else "no")
    table.add_row(
        "Open regions",
        ", ".join(open_regions) if open_regions else "none",
    )
    if problem:
        table.add_row("Problem", Text(problem, style="bold red"))

    console.print(table)
