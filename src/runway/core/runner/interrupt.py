"""
Interrupt handling for watch mode.

Watch mode blocks the main thread until the user presses Ctrl+C (or the
process receives SIGTERM). The InterruptHandler turns those signals into a
threading.Event, so the wait ends cleanly and the watch session can be
disposed in a `finally` block.

Usage:
    >>> from runway.core.runner.interrupt import InterruptHandler
    >>> handler = InterruptHandler()
    >>> handler.wait()  # Returns once SIGINT/SIGTERM arrives
"""

from __future__ import annotations

import signal
import sys
import threading
from typing import Any


class InterruptHandler:
    """
    Converts SIGINT/SIGTERM into a stop event.

    Signal handlers can only be installed from the main thread. Elsewhere the
    handler only waits on its event, which callers may set directly.

    Attributes:
        interrupted: Whether a stop was requested.
    """

    def __init__(
        self,
        stop_event: threading.Event | None = None,
        poll_interval: float = 0.5,
    ) -> None:
        """
        Initialize the handler.

        Args:
            stop_event: Event ending the wait (a new one if None)
            poll_interval: Seconds between wake-ups so signals are handled
        """
        self._event = stop_event or threading.Event()
        self._poll_interval = poll_interval
        self._original_sigint: Any = None
        self._original_sigterm: Any = None

    @property
    def interrupted(self) -> bool:
        return self._event.is_set()

    def request_stop(self) -> None:
        """End the wait from any thread."""
        self._event.set()

    def register(self) -> None:
        """
        Install SIGINT and SIGTERM handlers.

        Saves the original handlers so unregister() can restore them.
        """
        if threading.current_thread() is not threading.main_thread():
            return
        self._original_sigint = signal.signal(signal.SIGINT, self._handle_signal)
        self._original_sigterm = signal.signal(signal.SIGTERM, self._handle_signal)

    def unregister(self) -> None:
        """Restore the original signal handlers."""
        if self._original_sigint is not None:
            signal.signal(signal.SIGINT, self._original_sigint)
            self._original_sigint = None

        if self._original_sigterm is not None:
            signal.signal(signal.SIGTERM, self._original_sigterm)
            self._original_sigterm = None

    def wait(self) -> None:
        """Block until a stop is requested."""
        self.register()
        try:
            while not self._event.wait(self._poll_interval):
                pass
        except KeyboardInterrupt:
            self._event.set()
        finally:
            self.unregister()

    def _handle_signal(self, signum: int, frame: object) -> None:
        self._event.set()
        sys.stderr.write("\n")
        sys.stderr.flush()


def wait_for_interrupt(poll_interval: float = 0.5) -> None:
    """Block the calling thread until Ctrl+C or SIGTERM."""
    InterruptHandler(poll_interval=poll_interval).wait()


__all__ = ["InterruptHandler", "wait_for_interrupt"]
