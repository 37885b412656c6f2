"""Shared Rich console utilities for release-date-finder.

Provides a global Rich console instance and helpers for consistent
output formatting across CLI commands.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

# Global console instance (initialized in CLI)
_console: Console | None = None


def get_console() -> Console:
    """Get the global Rich console instance.

    Falls back to a default stdout console if the CLI has not set one.
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global Rich console instance."""
    global _console
    _console = console


def print(*args: Any, **kwargs: Any) -> None:
    """Print to the global console.

    Wrapper around console.print() that uses the global console instance.
    """
    get_console().print(*args, **kwargs)


def print_error(message: str) -> None:
    get_console().print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    get_console().print(f"[yellow]Warning: {escape(message)}[/yellow]")
