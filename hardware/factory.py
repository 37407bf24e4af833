"""
Hardware Factory

Factory for creating GPIO implementations.
Selects the sysfs backend or the simulation based on the requested mode.

Usage:
    gpio = HardwareFactory.create_gpio(mode="real")   # sysfs, fail if absent
    gpio = HardwareFactory.create_gpio(mode="mock")   # simulation
    gpio = HardwareFactory.create_gpio(mode="auto")   # sysfs if present
"""

import logging
from pathlib import Path
from typing import Literal, Optional

from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.sysfs_gpio import SysfsGPIO
from hardware.interfaces.gpio_interface import GPIOInterface

# Type aliases for better type hints
HardwareMode = Literal["auto", "real", "mock"]
HARDWARE_MODES = ("auto", "real", "mock")


class HardwareFactory:
    """Factory for creating GPIO interface implementations."""

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_gpio(
        cls,
        mode: HardwareMode = "auto",
        base_path: Optional[Path] = None,
    ) -> GPIOInterface:
        """
        Create a GPIO interface instance.

        Args:
            mode: "auto" (detect), "real" (force sysfs),
                  "mock" (force simulation)
            base_path: Sysfs root override, mainly for tests

        Returns:
            GPIOInterface implementation (SysfsGPIO or MockGPIO)

        Raises:
            RuntimeError: If mode="real" but sysfs GPIO is not available
            ValueError: On an unknown mode
        """
        if mode not in HARDWARE_MODES:
            raise ValueError(f"Unknown hardware mode: {mode}")

        if mode == "mock":
            cls._logger.info("Creating Mock GPIO (forced)")
            return MockGPIO()

        if mode == "real":
            try:
                gpio = SysfsGPIO(base_path=base_path)
                cls._logger.info("Creating sysfs GPIO (forced)")
                return gpio
            except Exception as e:
                raise RuntimeError(
                    f"Real GPIO requested but not available: {e}",
                ) from e

        # mode == "auto" - try real first, fall back to mock
        try:
            gpio = SysfsGPIO(base_path=base_path)
            cls._logger.info("Creating sysfs GPIO (auto-detected)")
            return gpio
        except Exception as e:
            cls._logger.warning(
                f"Sysfs GPIO not available ({e}), using Mock GPIO",
            )
            return MockGPIO()


def create_gpio(force_mock: bool = False) -> GPIOInterface:
    """
    Quick GPIO creation with simple mock override.

    Args:
        force_mock: If True, always use mock (good for testing)
    """
    mode = "mock" if force_mock else "auto"
    return HardwareFactory.create_gpio(mode=mode)
