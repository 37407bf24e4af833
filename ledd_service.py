#!/usr/bin/env python3
"""
LED Blink Daemon

Mirrors the presence of a sentinel file onto a status LED: while the file
exists the LED blinks, otherwise it stays at its idle level. Used to signal
boot and firmware-flash phases on embedded Linux boards.

Startup:
    1. Parse arguments                    (exit 1 on bad input)
    2. Resolve LED pin/polarity from fw_printenv   (exit 1 if not found)
    3. Export the pin, configure it as output at its idle level (exit 1 on failure)
    4. Detach into the background, install SIGTERM/SIGINT handlers
    5. Run the watch loop until a signal arrives
    6. Force the LED idle, unexport the pin, exit 0

Usage:
    ledd_service.py <blink_interval_seconds> [file_to_monitor]
    ledd_service.py 0.5 /var/run/boot --foreground
"""

import argparse
import logging
import logging.handlers
import math
import re
import sys
import time
from pathlib import Path
from typing import Callable, Optional

from config.settings import (
    DEFAULT_MONITOR_FILE,
    GPIO_MODE,
    LOG_LEVEL,
    POLL_INTERVAL,
    RESTORE_ORIGINAL_STATE,
    SYSLOG_ADDRESS,
    SYSLOG_IDENT,
)
from core.interval import DECIMAL_NUMBER
from core.lifecycle import LifecycleManager
from core.polarity import PolarityResolver
from core.runtime import RuntimeState
from core.watch_loop import WatchLoop
from hardware import GPIOError, GPIOInterface, GpioLine, HardwareFactory, LEDController
from hardware.factory import HARDWARE_MODES
from hardware.utils import check_gpio_available

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# Accepted shape of the blink_interval argument
_CLI_INTERVAL = re.compile(rf"\s*{DECIMAL_NUMBER}")


class StartupError(Exception):
    """Fatal problem before the daemon could take control of the LED."""


# =============================================================================
# COMMAND LINE
# =============================================================================


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def positive_interval(text: str) -> float:
    """argparse type: finite number of seconds greater than zero"""
    # The whole argument must be the number: no "1_0", no trailing text
    if _CLI_INTERVAL.fullmatch(text) is None:
        raise argparse.ArgumentTypeError(f"Invalid blink interval: {text}")
    value = float(text)
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError(f"Invalid blink interval: {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ledd",
        description="Blink the status LED while a sentinel file exists.",
    )
    parser.add_argument(
        "blink_interval",
        type=positive_interval,
        help="Blink half-period in seconds (overridden by the file's first line)",
    )
    parser.add_argument(
        "file_to_monitor",
        nargs="?",
        type=Path,
        default=DEFAULT_MONITOR_FILE,
        help=f"Sentinel file to watch (default: {DEFAULT_MONITOR_FILE})",
    )
    parser.add_argument(
        "-f",
        "--foreground",
        action="store_true",
        help="Stay attached to the terminal and log to stdout",
    )
    parser.add_argument(
        "--restore-original-state",
        action="store_true",
        default=RESTORE_ORIGINAL_STATE,
        help="Use the level found on the pin at startup as the idle level",
    )
    parser.add_argument(
        "--gpio-mode",
        choices=HARDWARE_MODES,
        default=GPIO_MODE,
        help=f"GPIO backend (default: {GPIO_MODE})",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging threshold (default: {LOG_LEVEL})",
    )
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments, exiting with status 1 on errors"""
    return build_parser().parse_args(argv)


# =============================================================================
# DAEMON
# =============================================================================


class LedDaemon:
    """
    Wires the resolver, GPIO backend, watch loop and lifecycle together.

    Usage:
        daemon = LedDaemon(blink_interval=0.5, monitor_file=Path("/var/run/boot"),
                           gpio=HardwareFactory.create_gpio("real"))
        with daemon.lifecycle:
            daemon.start()
            daemon.run()
    """

    def __init__(
        self,
        blink_interval: float,
        monitor_file: Path,
        gpio: GPIOInterface,
        resolver: Optional[PolarityResolver] = None,
        lifecycle: Optional[LifecycleManager] = None,
        restore_original_state: bool = False,
        poll_interval: float = POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.logger = logging.getLogger(__name__)
        self.blink_interval = blink_interval
        self.monitor_file = Path(monitor_file)
        self.gpio = gpio
        self.resolver = resolver or PolarityResolver()
        self.lifecycle = lifecycle or LifecycleManager()
        self.restore_original_state = restore_original_state
        self.poll_interval = poll_interval
        self._sleep = sleep

        self.line: Optional[GpioLine] = None
        self.led: Optional[LEDController] = None

    def start(self) -> None:
        """
        Take control of the LED.

        Raises:
            StartupError: Pin not resolvable, or export/output setup failed
        """
        line = self.resolver.resolve()
        if line is None:
            raise StartupError("Failed to retrieve GPIO pin from fw_printenv")

        check_gpio_available(self.gpio, self.logger)

        try:
            self.gpio.export(line.pin)
        except GPIOError as e:
            raise StartupError(f"Failed to export GPIO {line.pin}: {e}") from e

        # The pin is ours from here on - release it on every exit path
        self.line = line
        self.lifecycle.register_cleanup(self._release)

        if self.restore_original_state:
            line = self._snapshot_idle_level(line)
            self.line = line

        try:
            self.gpio.setup_output(line.pin, line.idle_value)
        except GPIOError as e:
            raise StartupError(f"Failed to configure GPIO {line.pin} as output: {e}") from e

        self.led = LEDController(self.gpio, line)
        self.led.set_idle()
        self.logger.info(
            f"GPIO {line.pin} ready (idle {line.idle_value.value}, "
            f"active {line.active_value.value})",
        )

    def _snapshot_idle_level(self, line: GpioLine) -> GpioLine:
        """Treat the level currently on the pin as idle"""
        try:
            current = self.gpio.read(line.pin)
        except GPIOError as e:
            self.logger.warning(
                f"Could not read GPIO {line.pin} ({e}), keeping polarity from fw_printenv",
            )
            return line

        self.logger.info(f"Keeping original GPIO {line.pin} level {current.value} as idle")
        return GpioLine.from_idle(line.pin, current)

    def _release(self) -> None:
        if self.led is not None:
            self.led.cleanup()
        elif self.line is not None:
            self.gpio.unexport(self.line.pin)

    def run(self, detach: bool = True) -> int:
        """
        Detach (optionally) and run the watch loop until a shutdown signal.

        Returns:
            Process exit code
        """
        if self.led is None or self.line is None:
            raise RuntimeError("start() must succeed before run()")

        if detach:
            self.lifecycle.detach_from_terminal()
        self.lifecycle.install_signal_handlers()

        runtime = RuntimeState(
            line=self.line,
            monitor_file=self.monitor_file,
            blink_interval=self.blink_interval,
            poll_interval=self.poll_interval,
        )
        WatchLoop(runtime, self.led, self.lifecycle.cancel_flag, sleep=self._sleep).run()

        self.logger.info("Shutdown signal received, releasing LED")
        return EXIT_SUCCESS


# =============================================================================
# ENTRY POINT
# =============================================================================


def setup_logging(foreground: bool = False, level: str = LOG_LEVEL) -> None:
    """
    Route logs to syslog (daemon facility) plus the console.

    In the background the console handler only shows warnings and errors,
    which matter before the process detaches; afterwards stderr is /dev/null.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout if foreground else sys.stderr)
    console_handler.setLevel(level if foreground else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(message)s | %(name)s"))
    logger.addHandler(console_handler)

    try:
        syslog_handler = logging.handlers.SysLogHandler(
            address=SYSLOG_ADDRESS,
            facility=logging.handlers.SysLogHandler.LOG_DAEMON,
        )
    except OSError as e:
        logger.warning(f"Cannot reach syslog at {SYSLOG_ADDRESS} ({e}), logging to console only")
        return

    syslog_handler.setLevel(level)
    syslog_handler.setFormatter(
        logging.Formatter(f"{SYSLOG_IDENT}[%(process)d]: %(levelname)s %(message)s"),
    )
    logger.addHandler(syslog_handler)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the daemon.

    Returns:
        0 after a clean signal-driven shutdown, 1 on any startup failure
    """
    args = parse_args(argv)
    setup_logging(foreground=args.foreground, level=args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("LED blink daemon starting")

    try:
        gpio = HardwareFactory.create_gpio(mode=args.gpio_mode)
    except RuntimeError as e:
        logger.critical(str(e))
        return EXIT_FAILURE

    daemon = LedDaemon(
        blink_interval=args.blink_interval,
        monitor_file=args.file_to_monitor,
        gpio=gpio,
        restore_original_state=args.restore_original_state,
    )

    with daemon.lifecycle:
        try:
            daemon.start()
        except StartupError as e:
            logger.critical(str(e))
            return EXIT_FAILURE

        try:
            return daemon.run(detach=not args.foreground)
        except Exception as e:
            logger.critical(f"Fatal error in main: {e}", exc_info=True)
            return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
