"""
Runway CLI - Test command.

Build the inputs with the test runner and run the tests, once or on every
change.
"""

from __future__ import annotations

from typing import Optional

import typer

from runway.cli.common import build_and_run, build_options_for, load_effective_config, prepare
from runway.core.build.models import Successful


def test(
    inputs: Optional[list[str]] = typer.Argument(
        None,
        help="Source files or directories to build",
    ),
    js: bool = typer.Option(False, "--js", help="Run tests as a linked script"),
    native: bool = typer.Option(False, "--native", help="Run tests as a native binary"),
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Rebuild and rerun tests whenever sources change",
    ),
    java_opts: Optional[list[str]] = typer.Option(
        None,
        "--java-opt",
        "-J",
        help="Option passed to java (repeatable)",
    ),
    java_command: Optional[str] = typer.Option(
        None,
        "--java-command",
        help="Java command to launch the test runner with",
    ),
    directories: Optional[list[str]] = typer.Option(
        None,
        "--directory",
        "-d",
        help="Extra directory to include in the build (repeatable)",
    ),
    toolchain: Optional[str] = typer.Option(
        None,
        "--toolchain",
        help="Toolchain name or 'module:attribute' path",
    ),
) -> None:
    """
    Build and run tests.

    The test runner's exit status becomes runway's exit status.

    Examples:
        runway test .                     # Run the tests once
        runway test . --native            # Run them as a native binary
        runway test . --watch             # Rerun on every change
    """
    config = load_effective_config(
        js,
        native,
        java_options=java_opts,
        toolchain=toolchain,
        directories=directories,
        **{"java.command": java_command},
    )
    context = prepare(config, list(inputs or []))

    def run_build(build: Successful, allow_terminate: bool) -> None:
        context.orchestrator.run_tests(
            build,
            [],
            allow_process_replace=allow_terminate,
            exit_on_error=allow_terminate,
        )

    build_and_run(context, build_options_for(config, test=True), watch, run_build)
