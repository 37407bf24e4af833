"""
GPIO Utilities

Shared helper functions for GPIO operations that must never crash the
caller: runtime writes and shutdown cleanup.
"""

import logging
from typing import Optional

from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface, PinState


def safe_write(
    gpio: GPIOInterface,
    pin: int,
    state: PinState,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Write a pin level, logging instead of raising on failure.

    A failed write is not queued; the next scheduled write simply tries again.

    Args:
        gpio: GPIO interface
        pin: Pin number
        state: Level to write
        logger: Optional logger for error messages

    Returns:
        True if the write succeeded

    Example:
        if not safe_write(self.gpio, 17, PinState.LOW, self.logger):
            ...  # retried on the next tick
    """
    try:
        gpio.write(pin, state)
        return True
    except GPIOError as e:
        if logger:
            logger.error(f"Failed to set GPIO {pin} to {state.value}: {e}")
        return False


def safe_gpio_cleanup(
    gpio: Optional[GPIOInterface],
    pin: int,
    idle_state: PinState,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Drive the pin to its idle level and release it, never raising.

    Args:
        gpio: GPIO interface to clean up, or None
        pin: Pin to release
        idle_state: Safe level to leave on the line
        logger: Optional logger for error messages
    """
    if gpio is None:
        return

    safe_write(gpio, pin, idle_state, logger)
    try:
        gpio.unexport(pin)
    except Exception as e:
        if logger:
            logger.warning(f"Error during GPIO cleanup: {e}")
        # Don't raise - cleanup should be forgiving


def check_gpio_available(
    gpio: GPIOInterface,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Check if GPIO hardware is available and log appropriate message.

    Returns:
        True if real hardware available, False if simulated
    """
    is_available = gpio.is_available()

    if logger:
        if is_available:
            logger.info("Running on real GPIO hardware")
        else:
            logger.warning("Running in GPIO simulation mode")

    return is_available
