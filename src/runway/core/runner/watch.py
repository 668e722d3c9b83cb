"""
Watch loop.

Keeps rebuilding and rerunning until the user interrupts. The toolchain owns
the change notifier and delivers one build outcome at a time; this module
turns each outcome into a run (or a "Compilation failed" report), blocks the
main thread until Ctrl+C, and disposes the session exactly once on the way
out.

Usage:
    >>> on_outcome = outcome_handler(run_build, sink=print)
    >>> run_watch(toolchain, inputs, options, on_outcome, post_action=print_watch_message)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from types import TracebackType

from rich.console import Console

from runway.core.build.models import BuildOptions, BuildOutcome, Inputs, Successful
from runway.core.runner.interrupt import wait_for_interrupt
from runway.core.toolchain.protocol import Toolchain, WatchSession

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

COMPILATION_FAILED = "Compilation failed"
WATCH_MESSAGE = "Watching sources, press Ctrl+C to exit."


def print_watch_message() -> None:
    err_console.print(f"[dim]{WATCH_MESSAGE}[/dim]")


def _print_to_stderr(message: str) -> None:
    err_console.print(message)


class ScopedWatchSession:
    """
    Wraps a toolchain watch session so it is disposed at most once.

    Usable as a context manager; dispose() may also be called directly and
    repeatedly.
    """

    def __init__(self, session: WatchSession) -> None:
        self._session = session
        self._disposed = False
        self._lock = threading.Lock()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
        logger.debug("Disposing watch session")
        self._session.dispose()

    def __enter__(self) -> ScopedWatchSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()


def outcome_handler(
    run: Callable[[Successful], object],
    sink: Callable[[str], None] | None = None,
) -> Callable[[BuildOutcome], None]:
    """
    Build the callback the toolchain calls with each build outcome.

    Args:
        run: Runs a successful build (must not terminate the process)
        sink: Receives the compilation failure report (defaults to stderr)

    Returns:
        Outcome callback
    """
    report = sink or _print_to_stderr

    def on_outcome(outcome: BuildOutcome) -> None:
        if isinstance(outcome, Successful):
            run(outcome)
        else:
            if outcome.message:
                logger.debug("Build failed: %s", outcome.message)
            report(COMPILATION_FAILED)

    return on_outcome


def watch(
    toolchain: Toolchain,
    inputs: Inputs,
    options: BuildOptions,
    on_outcome: Callable[[BuildOutcome], None],
    post_action: Callable[[], None] = print_watch_message,
) -> ScopedWatchSession:
    """Start watching; returns without blocking."""
    logger.debug("Starting watch session with toolchain %s", toolchain.name)
    return ScopedWatchSession(toolchain.watch(inputs, options, on_outcome, post_action))


def run_watch(
    toolchain: Toolchain,
    inputs: Inputs,
    options: BuildOptions,
    on_outcome: Callable[[BuildOutcome], None],
    post_action: Callable[[], None] = print_watch_message,
    wait: Callable[[], None] = wait_for_interrupt,
) -> None:
    """
    Watch until interrupted, then dispose the session.

    Args:
        toolchain: Toolchain doing the builds
        inputs: Resolved inputs
        options: Build options
        on_outcome: Called with each build outcome
        post_action: Called after each outcome
        wait: Blocks until watching should stop
    """
    session = watch(toolchain, inputs, options, on_outcome, post_action)
    try:
        wait()
    finally:
        session.dispose()


__all__ = [
    "COMPILATION_FAILED",
    "ScopedWatchSession",
    "WATCH_MESSAGE",
    "outcome_handler",
    "print_watch_message",
    "run_watch",
    "watch",
]
