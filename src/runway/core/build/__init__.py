"""
Build outcome models shared by the runner and toolchains.
"""

from runway.core.build.models import (
    BuildOptions,
    BuildOutcome,
    Failed,
    Inputs,
    Platform,
    RunJmhOptions,
    Successful,
)

__all__ = [
    "BuildOptions",
    "BuildOutcome",
    "Failed",
    "Inputs",
    "Platform",
    "RunJmhOptions",
    "Successful",
]
