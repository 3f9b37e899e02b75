"""
Standardized error handling and exit codes for the docsync CLI.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console(soft_wrap=True)


class ExitCode(IntEnum):
    """Standard exit codes for docsync operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Tracker, document or I/O failure; also stale docs in --check mode."""

    USER_ERROR = 2
    """Invalid configuration or arguments (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Issue not found in beads: haxe.rust-4jb",
        ...     solution="bd show haxe.rust-4jb",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}", highlight=False)

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]", highlight=False)

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}", highlight=False)
