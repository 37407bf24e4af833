"""
Controllers Package

High-level hardware controllers for the LED blink daemon.
"""

from hardware.controllers.led_controller import LEDController

# Public API (sorted alphabetically)
__all__ = [
    "LEDController",
]
