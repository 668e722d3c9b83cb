"""
Runner models.

Provides typed models for one program execution, separated from CLI
concerns:

- ExecutionTarget: which of the three execution strategies runs the program
- RunRequest: what to run and how exit codes are handled
- LauncherArtifact: a temporary launcher file owned by one execution

Usage:
    >>> from runway.core.runner.models import ManagedRuntime, RunRequest
    >>> target = ManagedRuntime(class_path=(Path("out"),))
    >>> request = RunRequest(entry_point="app.Main", args=("a", "b"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from runway.core.config.models import JsConfig, NativeConfig

# ===========================================================================
# Fixed entry points
# ===========================================================================

RUNNER_MAIN_CLASS = "runway.runner.Runner"
"""Bootstrap that receives the user's main class as its first argument."""

TEST_RUNNER_MAIN_CLASS = "runway.testrunner.DynamicTestRunner"
"""Test runner launched by the test command on the managed runtime."""

NATIVE_TEST_MAIN_CLASS = "scala.scalanative.testinterface.TestMain"
"""Main class compiled into native test launchers."""

JMH_MAIN_CLASS = "org.openjdk.jmh.Main"
"""Benchmark harness entry point."""


# ===========================================================================
# ExecutionTarget - exactly one strategy per run
# ===========================================================================


class TargetKind(str, Enum):
    """Discriminator for execution targets."""

    MANAGED_RUNTIME = "managed_runtime"
    LINKED_SCRIPT = "linked_script"
    NATIVE_BINARY = "native_binary"


@dataclass(frozen=True)
class ManagedRuntime:
    """
    Run on the managed runtime (JVM).

    Attributes:
        class_path: Full class path of the build.
        java_command: Java command to launch.
        java_options: Options placed before the main class.
    """

    class_path: tuple[Path, ...]
    java_command: str = "java"
    java_options: tuple[str, ...] = ()

    @property
    def kind(self) -> TargetKind:
        return TargetKind.MANAGED_RUNTIME


@dataclass(frozen=True)
class LinkedScript:
    """Link to a script and run it with the script runtime."""

    config: JsConfig = field(default_factory=JsConfig)

    @property
    def kind(self) -> TargetKind:
        return TargetKind.LINKED_SCRIPT


@dataclass(frozen=True)
class NativeBinary:
    """
    Compile to a native executable and run it directly.

    Attributes:
        work_dir: Directory for intermediate compiler files.
        config: Native compiler settings.
    """

    work_dir: Path
    config: NativeConfig = field(default_factory=NativeConfig)

    @property
    def kind(self) -> TargetKind:
        return TargetKind.NATIVE_BINARY


ExecutionTarget = Union[ManagedRuntime, LinkedScript, NativeBinary]


# ===========================================================================
# RunRequest
# ===========================================================================


@dataclass(frozen=True)
class RunRequest:
    """
    One program execution.

    Attributes:
        entry_point: Main class to run. Ignored in test mode.
        args: Program arguments, forwarded verbatim.
        allow_process_replace: Replace the current process when the platform
            supports it. Never returns in that case.
        exit_on_error: Exit the whole process with the program's code when it
            fails, instead of reporting and returning.
        runner_dependency: Launch through the runner bootstrap, which receives
            the entry point as its first argument.
        test_mode: Run the test runner instead of a main class.
    """

    entry_point: str = ""
    args: tuple[str, ...] = ()
    allow_process_replace: bool = False
    exit_on_error: bool = False
    runner_dependency: bool = False
    test_mode: bool = False


# ===========================================================================
# LauncherArtifact
# ===========================================================================


@dataclass(frozen=True)
class LauncherArtifact:
    """
    Temporary launcher file for one execution.

    Only valid inside the scope that yielded it; the file is removed when the
    scope exits.
    """

    path: Path
    kind: TargetKind


__all__ = [
    "ExecutionTarget",
    "JMH_MAIN_CLASS",
    "LauncherArtifact",
    "LinkedScript",
    "ManagedRuntime",
    "NATIVE_TEST_MAIN_CLASS",
    "NativeBinary",
    "RUNNER_MAIN_CLASS",
    "RunRequest",
    "TEST_RUNNER_MAIN_CLASS",
    "TargetKind",
]
