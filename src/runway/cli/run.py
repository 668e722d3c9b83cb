"""
Runway CLI - Run command.

Build the inputs and run the resulting program, once or on every change.
"""

from __future__ import annotations

from typing import Optional

import typer

from runway.cli.common import build_and_run, build_options_for, load_effective_config, prepare
from runway.core.build.models import Successful


def run(
    inputs: Optional[list[str]] = typer.Argument(
        None,
        help="Source files or directories to build ('-' reads sources from stdin)",
    ),
    main_class: Optional[str] = typer.Option(
        None,
        "--main-class",
        "-M",
        help="Main class to run (defaults to the one found in the build)",
    ),
    js: bool = typer.Option(
        False,
        "--js",
        help="Link to a script and run it with node",
    ),
    native: bool = typer.Option(
        False,
        "--native",
        help="Compile to a native binary and run it",
    ),
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Rebuild and rerun whenever sources change",
    ),
    jmh: Optional[bool] = typer.Option(
        None,
        "--jmh/--no-jmh",
        help="Run benchmarks through the JMH harness",
    ),
    jmh_version: Optional[str] = typer.Option(
        None,
        "--jmh-version",
        help="JMH version to use",
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
        help="Java command to launch programs with",
    ),
    runner_dependency: Optional[bool] = typer.Option(
        None,
        "--runner-dependency/--no-runner-dependency",
        help="Launch through the runner bootstrap",
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
    program_args: Optional[list[str]] = typer.Option(
        None,
        "--arg",
        help="Argument passed to the program (repeatable; everything after -- too)",
    ),
) -> None:
    """
    Build and run a program.

    Runs the main class found in the build, on the JVM by default, or as a
    linked script (--js) or a native binary (--native). The program's exit
    status becomes runway's exit status.

    Examples:
        runway run .                      # Build and run the current directory
        runway run app.scala -- a b       # Pass a and b to the program
        runway run . -M app.Other         # Pick another main class
        runway run . --watch              # Rerun on every change
    """
    config = load_effective_config(
        js,
        native,
        java_options=java_opts,
        toolchain=toolchain,
        add_runner_dependency=runner_dependency,
        directories=directories,
        **{
            "java.command": java_command,
            "benchmark.jmh": jmh,
            "benchmark.jmh_version": jmh_version,
        },
    )
    context = prepare(config, list(inputs or []))
    args = list(program_args or [])

    def run_build(build: Successful, allow_terminate: bool) -> None:
        context.orchestrator.maybe_run(
            build,
            main_class,
            args,
            allow_process_replace=allow_terminate,
            exit_on_error=allow_terminate,
        )

    build_and_run(context, build_options_for(config), watch, run_build)
