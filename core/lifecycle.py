"""
Process Lifecycle

Backgrounding, signal-driven cancellation and guaranteed cleanup for the
daemon process.

- detach_from_terminal(): classic double fork, at most once per process
- install_signal_handlers(): SIGTERM/SIGINT only set the CancellationFlag
- run_cleanup(): registered callbacks run exactly once from the main path,
  never from the signal handler

Usage:
    lifecycle = LifecycleManager()
    lifecycle.register_cleanup(led.cleanup)
    lifecycle.detach_from_terminal()
    lifecycle.install_signal_handlers()
    with lifecycle:
        WatchLoop(runtime, led, lifecycle.cancel_flag).run()
"""

import logging
import os
import signal
from typing import Callable, Optional

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)


class CancellationFlag:
    """
    Process-wide stop request.

    set() is a single attribute assignment so it can be called from a signal
    handler. Once set, the flag stays set.
    """

    __slots__ = ("_set",)

    def __init__(self):
        self._set = False

    def set(self) -> None:
        self._set = True

    def is_set(self) -> bool:
        return self._set


class LifecycleManager:
    """
    Owns the daemon's process-level concerns.

    Attributes:
        cancel_flag: Flag set by SIGTERM/SIGINT
        detached: True once detach_from_terminal() has run
    """

    def __init__(self, cancel_flag: Optional[CancellationFlag] = None):
        self.logger = logging.getLogger(__name__)
        self.cancel_flag = cancel_flag or CancellationFlag()
        self.detached = False

        self._cleanups: list[Callable[[], None]] = []
        self._cleanup_done = False
        self._previous_handlers: dict[int, object] = {}

    # =========================================================================
    # DAEMONIZATION
    # =========================================================================

    def detach_from_terminal(self) -> None:
        """
        Move the process into the background.

        Double fork with a new session in between, so the daemon can never
        reacquire a controlling terminal. The intermediate processes leave via
        os._exit() and therefore never run cleanup callbacks.

        Raises:
            RuntimeError: If called a second time
        """
        if self.detached:
            raise RuntimeError("Process is already detached")

        if not hasattr(os, "fork"):
            self.logger.warning("fork() not supported, staying in the foreground")
            self.detached = True
            return

        if os.fork() > 0:
            os._exit(0)

        os.setsid()

        if os.fork() > 0:
            os._exit(0)

        os.umask(0)
        os.chdir("/")
        self._redirect_standard_streams()

        self.detached = True
        self.logger.info(f"Detached from terminal (pid {os.getpid()})")

    def _redirect_standard_streams(self) -> None:
        devnull = os.open(os.devnull, os.O_RDWR)
        try:
            for fd in (0, 1, 2):
                os.dup2(devnull, fd)
        finally:
            if devnull > 2:
                os.close(devnull)

    # =========================================================================
    # SIGNALS
    # =========================================================================

    def _handle_signal(self, signum, _frame):
        """
        Handle shutdown signals.

        Only sets the flag; logging and GPIO work happen on the main path.
        """
        self.cancel_flag.set()

    def install_signal_handlers(self) -> None:
        """Route SIGTERM and SIGINT to the cancellation flag"""
        for signum in SHUTDOWN_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)

    def restore_signal_handlers(self) -> None:
        """Put back whatever handlers were installed before"""
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    # =========================================================================
    # CLEANUP
    # =========================================================================

    def register_cleanup(self, func: Callable[[], None]) -> None:
        """Register a callback for run_cleanup(), run in reverse order"""
        self._cleanups.append(func)

    def run_cleanup(self) -> None:
        """
        Run registered cleanup callbacks exactly once.

        A failing callback is logged and does not stop the others.
        """
        if self._cleanup_done:
            return
        self._cleanup_done = True

        for func in reversed(self._cleanups):
            try:
                func()
            except Exception as e:
                self.logger.error(f"Cleanup step {func!r} failed: {e}", exc_info=True)

        self.restore_signal_handlers()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Always cleanup, propagate exceptions"""
        self.run_cleanup()
        return False
