"""
Watch Loop

State machine mirroring the existence of the sentinel file onto the LED.

State Flow:
    IDLE ──(file appears)──> BLINKING ──(file gone / cancelled)──> IDLE

IDLE:
    Poll the file every `poll_interval` seconds. The LED sits at the idle
    level; if the last idle write failed it is retried on the next tick.

BLINKING:
    Entered once per appearance of the file. The interval is re-read from the
    file on entry (keeping the previous one if the content is unusable) and
    stays fixed until the sub-loop exits. Before every half-cycle the
    cancellation flag and the file are checked, so leaving BLINKING takes at
    most one interval. On exit the LED is forced to idle.

The loop is single-threaded; cancellation arrives through CancellationFlag,
set from a signal handler.
"""

import logging
import time
from typing import Callable

from core.interval import IntervalError, read_blink_interval
from core.lifecycle import CancellationFlag
from core.runtime import RuntimeState, WatchState
from hardware.controllers.led_controller import LEDController


class WatchLoop:
    """
    Polls the sentinel file and drives the LED accordingly.

    Usage:
        loop = WatchLoop(runtime, led, cancel_flag)
        loop.run()  # Blocks until cancel_flag is set
    """

    def __init__(
        self,
        runtime: RuntimeState,
        led: LEDController,
        cancel_flag: CancellationFlag,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.logger = logging.getLogger(__name__)
        self.runtime = runtime
        self.led = led
        self.cancel_flag = cancel_flag
        self._sleep = sleep

        # Completed Idle -> Blinking -> Idle sessions
        self.blink_sessions = 0

        # Logged once per run of failed existence checks
        self._check_failed = False

    @property
    def state(self) -> WatchState:
        return self.runtime.state

    def _file_present(self) -> bool:
        """An unreadable path (EACCES, ENAMETOOLONG ...) counts as absent"""
        try:
            present = self.runtime.monitor_file.exists()
        except OSError as e:
            if not self._check_failed:
                self.logger.warning(
                    f"Cannot check {self.runtime.monitor_file} ({e}), treating it as absent",
                )
                self._check_failed = True
            return False

        self._check_failed = False
        return present

    def run(self) -> None:
        """Run until the cancellation flag is set"""
        self.logger.info(
            f"Watching {self.runtime.monitor_file} "
            f"(GPIO {self.runtime.line.pin}, interval {self.runtime.blink_interval:.2f}s)",
        )

        while not self.cancel_flag.is_set():
            if self._file_present():
                self._blink_session()
                continue

            if not self.led.idle_confirmed:
                self.led.set_idle()
            self._sleep(self.runtime.poll_interval)

        self.logger.info("Watch loop stopped")

    def _blink_session(self) -> None:
        """Idle -> Blinking -> Idle, for one appearance of the file"""
        self.runtime.state = WatchState.BLINKING
        self.logger.info("Monitored file appeared, starting LED blink")
        self._refresh_interval()

        self._blink(self.runtime.blink_interval)

        self.led.set_idle()
        self.runtime.state = WatchState.IDLE
        self.blink_sessions += 1
        if self.cancel_flag.is_set():
            self.logger.info("Blinking interrupted by shutdown, GPIO set to idle")
        else:
            self.logger.info("Monitored file disappeared, turning off GPIO")

    def _refresh_interval(self) -> None:
        try:
            interval = read_blink_interval(self.runtime.monitor_file)
        except IntervalError as e:
            self.logger.warning(
                f"{e} - keeping blink interval {self.runtime.blink_interval:.2f}s",
            )
            return

        self.runtime.blink_interval = interval
        self.logger.info(f"Blink interval updated to {interval:.2f} seconds")

    def _should_keep_blinking(self) -> bool:
        return not self.cancel_flag.is_set() and self._file_present()

    def _blink(self, interval: float) -> None:
        line = self.runtime.line
        while True:
            for level in (line.active_value, line.idle_value):
                if not self._should_keep_blinking():
                    return
                self.led.write(level)
                self._sleep(interval)
