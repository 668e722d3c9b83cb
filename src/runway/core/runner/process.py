"""
Process execution for the three execution strategies.

Each strategy either replaces the current process (exec, POSIX only, does
not return) or spawns a child, waits for it, and returns its exit status.

Anything that must happen after the program exits (temp-file removal,
reporting) has to be arranged before calling with allow_replace=True:
a replaced process never runs another line of Python.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NoReturn

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


def can_replace_process() -> bool:
    """Whether this platform supports replacing the process image."""
    return os.name == "posix" and hasattr(os, "execvp")


def replace_process(command: Sequence[str], env: Mapping[str, str] | None = None) -> NoReturn:
    """
    Replace the current process with command.

    The new image inherits os.environ unless env gives a complete environment.

    Flushes standard streams first, since buffered output would otherwise be
    lost with the old process image.

    Raises:
        OSError: If exec fails
    """
    sys.stdout.flush()
    sys.stderr.flush()
    if env is None:
        os.execvp(command[0], list(command))
    else:
        os.execvpe(command[0], list(command), dict(env))


def _resolve_executable(executable: str) -> str | None:
    if os.path.sep in executable or (os.path.altsep and os.path.altsep in executable):
        return executable if os.access(executable, os.X_OK) else None
    return shutil.which(executable)


class ProcessRunner:
    """
    Launches programs for the managed-runtime, script and native strategies.

    Example:
        >>> runner = ProcessRunner()
        >>> code = runner.run_binary(Path("/tmp/main"), ["--help"], allow_replace=False)
    """

    def __init__(self, node_command: str = "node", env: dict[str, str] | None = None) -> None:
        """
        Initialize the runner.

        Args:
            node_command: Script runtime used by run_script
            env: Extra variables set over os.environ for every launched program
        """
        self.node_command = node_command
        self.env = env

    def run_managed(
        self,
        java_command: str,
        java_options: Sequence[str],
        class_path: Sequence[Path],
        entry_point: str,
        args: Sequence[str],
        allow_replace: bool,
    ) -> int:
        """Run entry_point on the managed runtime."""
        command = [
            java_command,
            *java_options,
            "-cp",
            os.pathsep.join(str(p) for p in class_path),
            entry_point,
            *args,
        ]
        return self.execute(command, allow_replace)

    def run_script(self, path: Path, args: Sequence[str], allow_replace: bool) -> int:
        """Run a linked script with the script runtime."""
        return self.execute([self.node_command, str(path), *args], allow_replace)

    def run_binary(self, path: Path, args: Sequence[str], allow_replace: bool) -> int:
        """Run a native executable directly."""
        return self.execute([str(path), *args], allow_replace)

    def environment(self) -> dict[str, str] | None:
        """Full environment for a launched program, or None to inherit os.environ."""
        if self.env is None:
            return None
        return {**os.environ, **self.env}

    def execute(self, command: list[str], allow_replace: bool) -> int:
        """
        Run command, replacing the process when allowed and supported.

        Returns:
            Exit status of the child, or 127 if the executable is missing.
            Does not return when the process is replaced.
        """
        executable = _resolve_executable(command[0])
        if executable is None:
            logger.error("Command not found: %s", command[0])
            return COMMAND_NOT_FOUND

        command = [executable, *command[1:]]
        logger.debug("Running %s", shlex.join(command))

        env = self.environment()
        if allow_replace and can_replace_process():
            replace_process(command, env)

        completed = subprocess.run(command, env=env, check=False)
        logger.debug("Process exited with %d", completed.returncode)
        return completed.returncode


__all__ = [
    "COMMAND_NOT_FOUND",
    "ProcessRunner",
    "can_replace_process",
    "replace_process",
]
