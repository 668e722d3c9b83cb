"""
Setup shared by the run and test commands.

Both commands load the configuration, load the toolchain, resolve the
inputs, and then either build once or watch. They only differ in how a
successful build is run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from runway.cli.errors import (
    ExitCode,
    print_incompatible_flags_error,
    print_input_error,
    print_toolchain_not_found_error,
)
from runway.core.build.models import BuildOptions, Inputs, RunJmhOptions, Successful
from runway.core.config.loader import load_config
from runway.core.config.models import RunwayConfig
from runway.core.errors import InputResolutionError, ToolchainNotFoundError
from runway.core.runner.dispatcher import Dispatcher, target_platform
from runway.core.runner.interrupt import wait_for_interrupt
from runway.core.runner.orchestrator import RunOrchestrator
from runway.core.runner.process import ProcessRunner
from runway.core.runner.stdin import read_stdin
from runway.core.runner.watch import (
    COMPILATION_FAILED,
    outcome_handler,
    print_watch_message,
    run_watch,
)
from runway.core.toolchain.protocol import Toolchain
from runway.core.toolchain.registry import get_toolchain

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

STDIN_INPUT = "-"


@dataclass
class CommandContext:
    """Everything a command needs once its inputs are resolved."""

    config: RunwayConfig
    toolchain: Toolchain
    inputs: Inputs
    orchestrator: RunOrchestrator


def load_effective_config(
    js: bool,
    native: bool,
    java_options: list[str] | None = None,
    **overrides: Any,
) -> RunwayConfig:
    """
    Load the layered configuration and apply CLI flag overrides.

    Java options from the command line are appended to the configured ones.

    Raises:
        typer.Exit: If mutually exclusive platform flags were both given
    """
    if js and native:
        print_incompatible_flags_error("--js", "--native")
        raise typer.Exit(ExitCode.USER_ERROR)

    config = load_config()
    return config.with_overrides(
        **{
            "js.enabled": True if js else None,
            "native.enabled": True if native else None,
            "java.options": [*config.java.options, *java_options] if java_options else None,
        },
        **overrides,
    )


def prepare(config: RunwayConfig, inputs: list[str]) -> CommandContext:
    """
    Load the toolchain and resolve the inputs.

    Raises:
        typer.Exit: With status 1 if the toolchain or the inputs are invalid
    """
    try:
        toolchain = get_toolchain(config.toolchain)
    except ToolchainNotFoundError as e:
        print_toolchain_not_found_error(e.name, e.available)
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    stdin = read_stdin() if STDIN_INPUT in inputs else None

    try:
        resolved = toolchain.resolve_inputs(inputs, Path.cwd(), config.directories, stdin)
    except InputResolutionError as e:
        print_input_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    logger.debug("Resolved inputs for %s in %s", resolved.project_name, resolved.workspace)

    dispatcher = Dispatcher(toolchain, ProcessRunner(node_command=config.js.node_command))
    orchestrator = RunOrchestrator(dispatcher, config, resolved.workspace)
    return CommandContext(config, toolchain, resolved, orchestrator)


def build_options_for(config: RunwayConfig, *, test: bool = False) -> BuildOptions:
    """Build options for the configured platform and modes."""
    run_jmh = None
    if config.benchmark.jmh and not test:
        run_jmh = RunJmhOptions(preprocess=True, java_command=config.java.command)

    return BuildOptions(
        platform=target_platform(config),
        add_runner_dependency=config.add_runner_dependency and not test,
        add_test_runner_dependency=test,
        run_jmh=run_jmh,
        jmh_version=config.benchmark.jmh_version,
    )


def _no_message() -> None:
    pass


def build_and_run(
    context: CommandContext,
    options: BuildOptions,
    watch: bool,
    run_build: Callable[[Successful, bool], object],
) -> None:
    """
    Build once and run, or watch and run after every successful build.

    run_build receives the build and whether it may terminate the process
    (replace it, or exit with the program's status).

    Raises:
        typer.Exit: With status 1 when the single build fails, 130 after
            watch mode is interrupted
    """
    if watch:
        post_action = print_watch_message if context.config.watch.show_message else _no_message
        poll = context.config.watch.interrupt_poll_seconds
        run_watch(
            context.toolchain,
            context.inputs,
            options,
            outcome_handler(lambda build: run_build(build, False)),
            post_action=post_action,
            wait=lambda: wait_for_interrupt(poll),
        )
        raise typer.Exit(ExitCode.SIGINT)

    outcome = context.toolchain.build(context.inputs, options)
    if isinstance(outcome, Successful):
        run_build(outcome, True)
        return

    err_console.print(COMPILATION_FAILED)
    raise typer.Exit(ExitCode.GENERAL_ERROR)


__all__ = [
    "CommandContext",
    "build_and_run",
    "build_options_for",
    "load_effective_config",
    "prepare",
]
