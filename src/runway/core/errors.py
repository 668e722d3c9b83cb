"""
Typed exceptions for runway.

Only conditions that stop a command before any program is launched are
exceptions. A program exiting nonzero or a build failing are ordinary
outcomes and never raise.
"""

from __future__ import annotations


class RunwayError(Exception):
    """Base exception for runway errors."""


class InputResolutionError(RunwayError):
    """The workspace or the command-line inputs could not be resolved."""


class ToolchainNotFoundError(RunwayError):
    """No toolchain matches the configured name."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f"Toolchain '{name}' not found"
        if self.available:
            message += f". Available toolchains: {', '.join(self.available)}"
        super().__init__(message)


__all__ = [
    "InputResolutionError",
    "RunwayError",
    "ToolchainNotFoundError",
]
