"""
Run orchestration and exit policy.

Ties entry point resolution, target selection and dispatch together for a
single execution, then applies the exit policy:

- exit status 0: success
- nonzero and exit_on_error: terminate the whole process with that status
- nonzero otherwise: report the status and return to the caller

Single-shot runs use exit_on_error=True so the program's status becomes the
command's status. Watch mode uses exit_on_error=False so a failing program
never takes the watcher down.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import NoReturn

from rich.console import Console

from runway.core.build.models import Successful
from runway.core.config.models import RunwayConfig
from runway.core.runner.dispatcher import Dispatcher, select_target
from runway.core.runner.entrypoint import resolve_entry_point
from runway.core.runner.models import ExecutionTarget, RunRequest

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


class RunPhase(str, Enum):
    """Where the orchestrator is in its current execution."""

    IDLE = "idle"
    RESOLVING = "resolving"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"
    REPORTED = "reported"
    TERMINATED = "terminated"


def format_exit_diagnostic(code: int) -> str:
    """
    Diagnostic line for a program that exited nonzero.

    Returns rich markup; the sink decides how to render it.

    Example:
        >>> format_exit_diagnostic(2)
        '[red]Program exited with return code [bright_red]2[/bright_red].[/red]'
    """
    return f"[red]Program exited with return code [bright_red]{code}[/bright_red].[/red]"


def _print_to_stderr(message: str) -> None:
    err_console.print(message)


class RunOrchestrator:
    """
    Runs a successful build once and applies the exit policy.

    Attributes:
        phase: Phase of the most recent execution.

    Example:
        >>> orchestrator = RunOrchestrator(Dispatcher(toolchain), config, workspace)
        >>> orchestrator.maybe_run(build, None, ["a"], allow_process_replace=False,
        ...                        exit_on_error=False)
        True
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        config: RunwayConfig,
        workspace: Path,
        sink: Callable[[str], None] | None = None,
        terminate: Callable[[int], NoReturn] = sys.exit,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            dispatcher: Launches programs
            config: Effective configuration, used for target selection
            workspace: Workspace root
            sink: Receives nonzero-exit diagnostics (defaults to stderr)
            terminate: Ends the process with a status (defaults to sys.exit)
        """
        self.dispatcher = dispatcher
        self.config = config
        self.workspace = workspace
        self.sink = sink or _print_to_stderr
        self.terminate = terminate
        self.phase = RunPhase.IDLE

    def maybe_run(
        self,
        build: Successful,
        main_class: str | None,
        args: Sequence[str],
        allow_process_replace: bool,
        exit_on_error: bool,
    ) -> bool | None:
        """
        Resolve the entry point and run it if there is one.

        Returns:
            None when nothing was run, else whether the program succeeded
        """
        self.phase = RunPhase.RESOLVING
        entry_point = resolve_entry_point(
            main_class, build.options.run_jmh, build.retained_main_classes
        )
        if entry_point is None:
            self.phase = RunPhase.IDLE
            return None

        request = RunRequest(
            entry_point=entry_point,
            args=tuple(args),
            allow_process_replace=allow_process_replace,
            exit_on_error=exit_on_error,
            runner_dependency=build.options.add_runner_dependency,
        )
        return self.run_once(request, build, self.select_target(build))

    def run_tests(
        self,
        build: Successful,
        args: Sequence[str],
        allow_process_replace: bool,
        exit_on_error: bool,
    ) -> bool:
        """Run the test runner of the build's platform."""
        request = RunRequest(
            args=tuple(args),
            allow_process_replace=allow_process_replace,
            exit_on_error=exit_on_error,
            test_mode=True,
        )
        return self.run_once(request, build, self.select_target(build))

    def select_target(self, build: Successful) -> ExecutionTarget:
        return select_target(self.config, build, self.workspace)

    def run_once(self, request: RunRequest, build: Successful, target: ExecutionTarget) -> bool:
        """
        Dispatch one request and apply the exit policy.

        Returns:
            True iff the program exited with status 0
        """
        self.phase = RunPhase.DISPATCHING
        code = self.dispatcher.dispatch(request, build, target)
        return self.handle_exit(code, request.exit_on_error)

    def handle_exit(self, code: int, exit_on_error: bool) -> bool:
        if code == 0:
            self.phase = RunPhase.COMPLETED
            return True

        if exit_on_error:
            self.phase = RunPhase.TERMINATED
            logger.debug("Program failed with %d, exiting", code)
            self.terminate(code)
        else:
            self.phase = RunPhase.REPORTED
            self.sink(format_exit_diagnostic(code))
        return False


__all__ = ["RunOrchestrator", "RunPhase", "format_exit_diagnostic"]
