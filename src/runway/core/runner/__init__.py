"""
Core runner package.

Provides the execution layer of the run and test commands, separated from
CLI concerns: picking the entry point, picking the execution strategy,
scoping temporary launchers, launching the program, applying the exit
policy, and the watch loop.

Modules:
    models: Execution targets, run requests and launcher artifacts.
    entrypoint: Entry point resolution.
    launcher: Scoped temporary launcher files for script and native targets.
    process: Process replacement and supervised child processes.
    dispatcher: Target selection and per-strategy dispatch.
    orchestrator: Single execution plus exit/report policy.
    watch: Watch loop and exactly-once session disposal.
    interrupt: Ctrl+C wait for watch mode.
    stdin: Standard input capture.
"""

from runway.core.runner.dispatcher import Dispatcher, managed_invocation, select_target
from runway.core.runner.entrypoint import resolve_entry_point
from runway.core.runner.interrupt import InterruptHandler, wait_for_interrupt
from runway.core.runner.launcher import linked_script, native_launcher, scoped_launcher
from runway.core.runner.models import (
    ExecutionTarget,
    LauncherArtifact,
    LinkedScript,
    ManagedRuntime,
    NativeBinary,
    RunRequest,
    TargetKind,
)
from runway.core.runner.orchestrator import RunOrchestrator, RunPhase, format_exit_diagnostic
from runway.core.runner.process import ProcessRunner, can_replace_process
from runway.core.runner.stdin import read_stdin
from runway.core.runner.watch import (
    ScopedWatchSession,
    outcome_handler,
    print_watch_message,
    run_watch,
    watch,
)

__all__ = [
    # Models
    "ExecutionTarget",
    "LauncherArtifact",
    "LinkedScript",
    "ManagedRuntime",
    "NativeBinary",
    "RunRequest",
    "TargetKind",
    # Resolution and dispatch
    "Dispatcher",
    "managed_invocation",
    "resolve_entry_point",
    "select_target",
    # Launchers and processes
    "ProcessRunner",
    "can_replace_process",
    "linked_script",
    "native_launcher",
    "scoped_launcher",
    # Orchestration
    "RunOrchestrator",
    "RunPhase",
    "format_exit_diagnostic",
    # Watch mode
    "InterruptHandler",
    "ScopedWatchSession",
    "outcome_handler",
    "print_watch_message",
    "run_watch",
    "wait_for_interrupt",
    "watch",
    # Stdin
    "read_stdin",
]
