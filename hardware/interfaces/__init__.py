"""
Hardware Interfaces Package

Exposes abstract interfaces that define contracts for hardware components.
"""

from hardware.interfaces.gpio_interface import (
    GPIOError,
    GPIOInterface,
    PinState,
)

# Public API (sorted alphabetically)
__all__ = [
    "GPIOError",
    "GPIOInterface",
    "PinState",
]
