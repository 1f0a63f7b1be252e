"""Rich-based output utilities for the trgrpc CLI.

The payload goes to stdout untouched; everything meant for a human goes to
stderr so the output can be piped.
"""

from rich.console import Console
from rich.markup import escape

# Shared console instance
console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[dim]{escape(message)}[/dim]")
