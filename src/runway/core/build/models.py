"""
Build outcome models.

Defines the values exchanged with the toolchain: the resolved inputs of a
build, the options a build was requested with, and the tagged outcome of a
build attempt. All models are immutable; a toolchain produces a fresh
outcome for every build and the runner consumes it once.

Usage:
    >>> from runway.core.build.models import BuildOptions, Successful
    >>> build = Successful(
    ...     class_path=(Path("out/classes"),),
    ...     options=BuildOptions(),
    ...     retained_main_classes=("app.Main",),
    ... )
    >>> build.is_success
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class Platform(str, Enum):
    """Target platform a build was compiled for."""

    JVM = "jvm"
    JS = "js"
    NATIVE = "native"


@dataclass(frozen=True)
class RunJmhOptions:
    """
    Benchmark harness options.

    Attributes:
        preprocess: Only run the benchmark source generator, do not launch
            the harness itself.
        java_command: Java command used by the benchmark generator.
    """

    preprocess: bool = False
    java_command: str = "java"


@dataclass(frozen=True)
class BuildOptions:
    """
    Options a build is requested with.

    The toolchain carries these back on a successful build, so the runner
    can inspect the options the artifacts were actually produced with.

    Attributes:
        platform: Platform to compile for.
        add_runner_dependency: Put the runner bootstrap on the class path;
            the bootstrap re-dispatches to the user's main class.
        add_test_runner_dependency: Put the test runner on the class path.
        run_jmh: Benchmark options, or None when benchmarking is off.
        jmh_version: Benchmark harness version override.
    """

    platform: Platform = Platform.JVM
    add_runner_dependency: bool = False
    add_test_runner_dependency: bool = False
    run_jmh: RunJmhOptions | None = None
    jmh_version: str | None = None


@dataclass(frozen=True)
class Inputs:
    """
    Resolved inputs of a build.

    Attributes:
        workspace: Root directory of the workspace.
        project_name: Name derived from the inputs, used for work directories.
        elements: Source files and directories making up the build.
        stdin: Source bytes piped on standard input, if any.
    """

    workspace: Path
    project_name: str
    elements: tuple[Path, ...] = ()
    stdin: bytes | None = None


@dataclass(frozen=True)
class Successful:
    """
    A build that produced usable artifacts.

    Attributes:
        class_path: Full class path of the build, outputs first.
        options: Options the build was produced with.
        retained_main_classes: Entry points found by analysis of the output.
        project_name: Name of the built project.
    """

    class_path: tuple[Path, ...]
    options: BuildOptions = field(default_factory=BuildOptions)
    retained_main_classes: tuple[str, ...] = ()
    project_name: str = "project"

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    """A build that did not compile."""

    message: str = ""

    @property
    def is_success(self) -> bool:
        return False


BuildOutcome = Union[Successful, Failed]


__all__ = [
    "BuildOptions",
    "BuildOutcome",
    "Failed",
    "Inputs",
    "Platform",
    "RunJmhOptions",
    "Successful",
]
