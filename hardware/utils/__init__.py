"""
Hardware Utilities Package

Exposes shared utility functions for hardware operations.

Public API:
    - check_gpio_available: Check if GPIO hardware is available
    - safe_gpio_cleanup: Force idle level and release a pin without raising
    - safe_write: Write a pin level, logging failures instead of raising
"""

from hardware.utils.gpio_utils import (
    check_gpio_available,
    safe_gpio_cleanup,
    safe_write,
)

# Public API
__all__ = [
    "check_gpio_available",
    "safe_gpio_cleanup",
    "safe_write",
]
