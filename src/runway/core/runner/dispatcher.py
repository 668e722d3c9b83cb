"""
Backend dispatch.

Chooses the execution target for a run from the configuration and launches
the program with the matching strategy:

- ManagedRuntime: java with the build's class path
- LinkedScript: link a temporary script, run it with node
- NativeBinary: compile a temporary executable, run it

Launcher-backed strategies always spawn a child, even when process
replacement is allowed: the temporary launcher has to outlive the program
and be removed after it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from runway.core.build.models import Platform, Successful
from runway.core.config.models import NativeConfig, RunwayConfig
from runway.core.runner.launcher import linked_script, native_launcher
from runway.core.runner.models import (
    NATIVE_TEST_MAIN_CLASS,
    RUNNER_MAIN_CLASS,
    TEST_RUNNER_MAIN_CLASS,
    ExecutionTarget,
    LinkedScript,
    ManagedRuntime,
    NativeBinary,
    RunRequest,
)
from runway.core.runner.process import ProcessRunner
from runway.core.toolchain.protocol import Toolchain

logger = logging.getLogger(__name__)


def native_work_dir(config: NativeConfig, workspace: Path, project_name: str) -> Path:
    """Directory for intermediate native compiler files."""
    if config.work_dir:
        work_dir = Path(config.work_dir)
        return work_dir if work_dir.is_absolute() else workspace / work_dir
    return workspace / ".runway" / project_name / "native"


def target_platform(config: RunwayConfig) -> Platform:
    """
    Platform selected by the configuration.

    When several platform flags are set, script wins over native, and native
    wins over the managed runtime.
    """
    if config.js.enabled:
        return Platform.JS
    if config.native.enabled:
        return Platform.NATIVE
    return Platform.JVM


def select_target(config: RunwayConfig, build: Successful, workspace: Path) -> ExecutionTarget:
    """
    Derive the single execution target for a run.

    Args:
        config: Effective configuration (CLI flags applied)
        build: Successful build to run
        workspace: Workspace root, base of the native work directory

    Returns:
        The execution target
    """
    if config.js.enabled and config.native.enabled:
        logger.warning("Both --js and --native are enabled; running the linked script")

    platform = target_platform(config)
    if platform is Platform.JS:
        return LinkedScript(config=config.js)
    if platform is Platform.NATIVE:
        return NativeBinary(
            config=config.native,
            work_dir=native_work_dir(config.native, workspace, build.project_name),
        )
    return ManagedRuntime(
        class_path=build.class_path,
        java_command=config.java.command,
        java_options=tuple(config.java.options),
    )


def managed_invocation(request: RunRequest) -> tuple[str, tuple[str, ...]]:
    """
    Main class and arguments the managed runtime is launched with.

    Examples:
        >>> managed_invocation(RunRequest(entry_point="Main", args=("a", "b")))
        ('Main', ('a', 'b'))
        >>> managed_invocation(
        ...     RunRequest(entry_point="Main", args=("a",), runner_dependency=True)
        ... )
        ('runway.runner.Runner', ('Main', 'a'))
    """
    if request.test_mode:
        return TEST_RUNNER_MAIN_CLASS, ()
    if request.runner_dependency:
        return RUNNER_MAIN_CLASS, (request.entry_point, *request.args)
    return request.entry_point, request.args


class Dispatcher:
    """
    Launches a program with the strategy of its execution target.

    Example:
        >>> dispatcher = Dispatcher(toolchain)
        >>> code = dispatcher.dispatch(request, build, ManagedRuntime(build.class_path))
    """

    def __init__(self, toolchain: Toolchain, process_runner: ProcessRunner | None = None) -> None:
        self.toolchain = toolchain
        self.process_runner = process_runner or ProcessRunner()

    def dispatch(self, request: RunRequest, build: Successful, target: ExecutionTarget) -> int:
        """
        Run the program and return its exit status.

        Does not return if the managed runtime replaces the current process.
        """
        if isinstance(target, LinkedScript):
            return self._run_linked_script(request, build, target)
        if isinstance(target, NativeBinary):
            return self._run_native_binary(request, build, target)
        return self._run_managed(request, target)

    def _run_managed(self, request: RunRequest, target: ManagedRuntime) -> int:
        entry_point, args = managed_invocation(request)
        logger.debug("Launching %s on the managed runtime", entry_point)
        return self.process_runner.run_managed(
            target.java_command,
            target.java_options,
            target.class_path,
            entry_point,
            args,
            allow_replace=request.allow_process_replace,
        )

    def _run_linked_script(
        self, request: RunRequest, build: Successful, target: LinkedScript
    ) -> int:
        entry_point = None if request.test_mode else request.entry_point
        with linked_script(
            self.toolchain, build, entry_point, request.test_mode, target.config
        ) as artifact:
            return self.process_runner.run_script(
                artifact.path, request.args, allow_replace=False
            )

    def _run_native_binary(
        self, request: RunRequest, build: Successful, target: NativeBinary
    ) -> int:
        entry_point = NATIVE_TEST_MAIN_CLASS if request.test_mode else request.entry_point
        with native_launcher(
            self.toolchain, build, entry_point, target.config, target.work_dir
        ) as artifact:
            return self.process_runner.run_binary(
                artifact.path, request.args, allow_replace=False
            )


__all__ = [
    "Dispatcher",
    "managed_invocation",
    "native_work_dir",
    "select_target",
    "target_platform",
]
