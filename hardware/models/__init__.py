"""
Hardware Models Package

Data classes describing the GPIO resources the daemon owns.
"""

from hardware.models.gpio_line import GpioLine

__all__ = [
    "GpioLine",
]
