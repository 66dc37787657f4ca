"""Progress reporting utilities using Rich.

Progress notes go to stdout, diagnostics to stderr.
"""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def _stamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def log(message: str, *, style: str = "bold") -> None:
    """Log a timestamped message."""
    console.print(f"[dim]\\[{_stamp()}][/dim] {message}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log a processing step."""
    console.print(
        f"[dim]\\[{_stamp()}][/dim] [bold cyan]{step}[/bold cyan] {message}",
        highlight=False,
    )


def log_success(message: str) -> None:
    """Log a success message."""
    log(f"[green]✓[/green] {message}", style="")


def log_warning(message: str) -> None:
    """Log a warning message to stderr."""
    err_console.print(
        f"[dim]\\[{_stamp()}][/dim] [yellow]⚠[/yellow] {message}",
        highlight=False,
    )


def log_error(message: str) -> None:
    """Log an error message to stderr."""
    err_console.print(
        f"[dim]\\[{_stamp()}][/dim] [red]✗[/red] {message}",
        highlight=False,
    )


def show_summary(title: str, duration_seconds: float, details: dict) -> None:
    """Show a summary panel for a finished conversion."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    for key, value in details.items():
        table.add_row(key, escape(str(value)))

    table.add_row("Duration", f"{duration_seconds:.2f}s")

    console.print(Panel(table, title=f"[bold]{escape(title)}[/bold]", border_style="green"))
