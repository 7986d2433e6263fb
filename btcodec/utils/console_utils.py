"""Console utilities for Rich output."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape


def create_console(stderr: bool = False) -> Console:
    """Create a Rich Console bound to stdout or stderr."""
    return Console(stderr=stderr, safe_box=True)


def print_success(
    message: str,
    console: Console | None = None,
    **kwargs: Any,
) -> None:
    """Print a success message with Rich formatting.

    Args:
        message: Message to display
        console: Optional Rich Console instance, stderr by default
        **kwargs: Additional arguments for console.print()

    """
    if console is None:
        console = create_console(stderr=True)
    kwargs.setdefault("soft_wrap", True)
    console.print(f"[green]✓[/green] {escape(message)}", **kwargs)


def print_error(
    message: str,
    console: Console | None = None,
    **kwargs: Any,
) -> None:
    """Print an error message with Rich formatting.

    Args:
        message: Message to display
        console: Optional Rich Console instance, stderr by default
        **kwargs: Additional arguments for console.print()

    """
    if console is None:
        console = create_console(stderr=True)
    kwargs.setdefault("soft_wrap", True)
    console.print(f"[red]✗[/red] {escape(message)}", **kwargs)
