"""
Standardized error handling and exit codes for the runway CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for runway CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Input resolution, toolchain or compilation failure."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


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
        ...     "No toolchain configured",
        ...     solution="runway run --toolchain mypkg.toolchain:Toolchain",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_toolchain_not_found_error(name: str, available: list[str]) -> None:
    """Print error when the configured toolchain cannot be loaded."""
    if available:
        reason = f"Available toolchains: {', '.join(available)}"
    else:
        reason = "No toolchain is registered or installed"

    print_error(
        f"Toolchain '{name}' not found",
        reason=reason,
        solution="--toolchain package.module:Toolchain  # or set RUNWAY_TOOLCHAIN",
    )


def print_input_error(message: str) -> None:
    """Print error when the inputs cannot be resolved."""
    print_error(message)


def print_incompatible_flags_error(flag1: str, flag2: str) -> None:
    """Print error when incompatible CLI flags are used together."""
    print_error(
        f"Cannot use {flag1} with {flag2}",
        solution=f"Remove one of the flags: {flag1} or {flag2}",
    )


__all__ = [
    "ExitCode",
    "print_error",
    "print_incompatible_flags_error",
    "print_input_error",
    "print_toolchain_not_found_error",
]
