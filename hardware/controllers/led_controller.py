"""
LED Controller

Drives the single status LED through a GPIOInterface, translating "idle" and
"active" into the logic levels of the resolved GpioLine.

Runtime write failures never propagate: they are logged and the controller
remembers that the line is not confirmed idle, so the caller can retry on its
next tick. Nothing is queued.
"""

import logging
from typing import Any, Dict, Optional

from hardware.interfaces.gpio_interface import GPIOInterface, PinState
from hardware.models import GpioLine
from hardware.utils import safe_gpio_cleanup, safe_write


class LEDController:
    """
    Manages the status LED for the blink daemon.

    Usage:
        with LEDController(gpio, line) as led:
            led.set_active()
            led.set_idle()
        # LED forced idle and pin unexported here
    """

    def __init__(self, gpio: GPIOInterface, line: GpioLine):
        """
        Initialize LED controller.

        The pin must already be exported and configured as output.

        Args:
            gpio: GPIO interface driving the pin
            line: Resolved pin and polarity
        """
        self.logger = logging.getLogger(__name__)
        self.gpio = gpio
        self.line = line

        # Level of the last successful write, None before the first one
        self.last_written: Optional[PinState] = None
        self._last_write_failed = False
        self._cleaned_up = False

    @property
    def idle_confirmed(self) -> bool:
        """True when the last write succeeded and it was the idle level"""
        return not self._last_write_failed and self.last_written == self.line.idle_value

    def write(self, state: PinState) -> bool:
        """
        Drive the line to `state`.

        Returns:
            True on success, False if the write failed (already logged)
        """
        if safe_write(self.gpio, self.line.pin, state, self.logger):
            self.last_written = state
            self._last_write_failed = False
            return True

        self._last_write_failed = True
        return False

    def set_idle(self) -> bool:
        """Turn the LED off (idle level)"""
        return self.write(self.line.idle_value)

    def set_active(self) -> bool:
        """Turn the LED on (active level)"""
        return self.write(self.line.active_value)

    def get_status(self) -> Dict[str, Any]:
        """Current controller state, for debugging"""
        return {
            "pin": self.line.pin,
            "active_low": self.line.active_low,
            "last_written": self.last_written.value if self.last_written else None,
            "idle_confirmed": self.idle_confirmed,
            "gpio_available": self.gpio.is_available(),
        }

    def cleanup(self) -> None:
        """
        Force the LED idle and release the pin.

        Safe to call multiple times - only the first call touches the GPIO.
        """
        if self._cleaned_up:
            return
        self._cleaned_up = True

        self.logger.info(f"Releasing GPIO {self.line.pin}")
        safe_gpio_cleanup(self.gpio, self.line.pin, self.line.idle_value, self.logger)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager - always cleanup, propagate exceptions"""
        self.cleanup()
        return False
