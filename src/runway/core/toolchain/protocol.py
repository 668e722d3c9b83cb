"""
Toolchain protocol.

A toolchain bundles the collaborators the runner relies on but does not
implement: input resolution, compilation, watching sources for changes,
script linking and native compilation. Any object satisfying the protocol
can be plugged in through the registry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from runway.core.build.models import BuildOptions, BuildOutcome, Inputs, Successful

if TYPE_CHECKING:
    from runway.core.config.models import JsConfig, NativeConfig


@runtime_checkable
class WatchSession(Protocol):
    """
    Live handle over a rebuild-on-change loop.

    Owns the underlying change-notification resources. dispose() releases
    them; it is called exactly once by the runner.
    """

    def dispose(self) -> None:
        """Stop watching and release the notifier."""
        ...


@runtime_checkable
class Toolchain(Protocol):
    """
    Protocol for toolchain implementations.

    Toolchains are responsible for:
    - Turning command-line inputs into a resolved workspace
    - Compiling the workspace for a platform
    - Re-running the build whenever sources change
    - Linking a script launcher for the script platform
    - Compiling a native launcher for the native platform
    """

    @property
    def name(self) -> str:
        """
        Toolchain name.

        Returns:
            Lowercase toolchain identifier
        """
        ...

    def resolve_inputs(
        self,
        args: list[str],
        cwd: Path,
        directories: list[str],
        stdin: bytes | None,
    ) -> Inputs:
        """
        Resolve command-line inputs into a workspace.

        Args:
            args: Source files and directories given on the command line
            cwd: Working directory relative paths are resolved against
            directories: Extra directories to include
            stdin: Source bytes piped on standard input, if any

        Returns:
            Resolved inputs

        Raises:
            InputResolutionError: If the inputs are malformed
        """
        ...

    def build(self, inputs: Inputs, options: BuildOptions) -> BuildOutcome:
        """
        Compile the inputs once.

        Returns:
            Successful or Failed outcome
        """
        ...

    def watch(
        self,
        inputs: Inputs,
        options: BuildOptions,
        on_outcome: Callable[[BuildOutcome], None],
        post_action: Callable[[], None],
    ) -> WatchSession:
        """
        Build now and again on every source change.

        on_outcome is called with each fresh outcome, one at a time, then
        post_action is called. Returns without blocking.

        Returns:
            Session handle to dispose when watching should stop
        """
        ...

    def link_script(
        self,
        build: Successful,
        dest: Path,
        entry_point: str | None,
        test_mode: bool,
        config: "JsConfig",
    ) -> None:
        """
        Link the build into a script at dest.

        Args:
            build: Successful build to link
            dest: File to write the linked script to
            entry_point: Main class to initialise, or None in test mode
            test_mode: Add the test initializer instead of a main initializer
            config: Linker settings
        """
        ...

    def compile_native(
        self,
        build: Successful,
        entry_point: str,
        dest: Path,
        config: "NativeConfig",
        work_dir: Path,
        logger: logging.Logger,
    ) -> None:
        """
        Compile the build into a native executable at dest.

        Args:
            build: Successful build to compile
            entry_point: Main class of the executable
            dest: File to write the executable to
            config: Native compiler settings
            work_dir: Directory for intermediate files
            logger: Logger for compiler output
        """
        ...


__all__ = ["Toolchain", "WatchSession"]
