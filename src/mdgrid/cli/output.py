"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdgrid/cli/output.py
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

_stderr_console: Optional[Console] = None


def get_console() -> Console:
    """Return the shared stderr console used for notices and errors."""
    global _stderr_console
    if _stderr_console is None:
        _stderr_console = Console(stderr=True, highlight=False)
    return _stderr_console


def make_notifier(console: Optional[Console] = None) -> Callable[[str], None]:
    """Build a notifier that prints user-facing notices to stderr."""
    target = console or get_console()

    def notify(message: str) -> None:
        target.print(f"[cyan]ℹ[/cyan] {escape(message)}")

    return notify


def print_success(message: str, console: Optional[Console] = None) -> None:
    """Print a success line."""
    (console or get_console()).print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str, console: Optional[Console] = None) -> None:
    """Print an error line."""
    (console or get_console()).print(f"[bold red]Error:[/bold red] {escape(message)}")
