"""
Hardware Module

GPIO abstraction for the status LED.

Provides the sysfs backend used on the board and a mock backend for
development and tests, selected by the factory.

Public API:
    - HardwareFactory: Factory for creating GPIO backends
    - create_gpio: Quick GPIO creation with auto-detection
    - GPIOInterface: GPIO contract
    - GPIOError: GPIO failure
    - PinState: Logic levels
    - GpioLine: Resolved LED pin and polarity
    - LEDController: Idle/active driver for the LED

Usage:
    from hardware import HardwareFactory, LEDController

    gpio = HardwareFactory.create_gpio(mode="real")
    led = LEDController(gpio, line)
"""

from hardware.controllers.led_controller import LEDController
from hardware.factory import HardwareFactory, create_gpio
from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface, PinState
from hardware.models import GpioLine

__all__ = [
    "GPIOError",
    "GPIOInterface",
    "GpioLine",
    "HardwareFactory",
    "LEDController",
    "PinState",
    "create_gpio",
]
