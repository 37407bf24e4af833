"""
Hardware Implementations Package

Exposes concrete implementations of hardware interfaces.
"""

from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.sysfs_gpio import SysfsGPIO

# Public API (sorted alphabetically)
__all__ = [
    "MockGPIO",
    "SysfsGPIO",
]
