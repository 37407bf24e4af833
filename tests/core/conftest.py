"""
Test Configuration and Fixtures

Fixtures for the core daemon logic: a mock-backed LED, a sentinel file path
in tmp_path, and a scripted sleep that lets tests change the world between
loop ticks without real waiting.
"""

import pytest

from core.lifecycle import CancellationFlag
from core.runtime import RuntimeState
from hardware.controllers.led_controller import LEDController
from hardware.implementations.mock_gpio import MockGPIO
from hardware.interfaces.gpio_interface import PinState
from hardware.models import GpioLine

LED_PIN = 17
CLI_INTERVAL = 1.5


class ScriptedSleep:
    """
    Stand-in for time.sleep.

    Records every requested duration and runs the scripted action for that
    call, if any. After `limit` calls it sets the cancellation flag so a
    broken loop can never hang the test run.
    """

    def __init__(self, cancel_flag, limit=200):
        self.cancel_flag = cancel_flag
        self.limit = limit
        self.calls = []
        self._actions = {}

    def at(self, call_index, action):
        """Run `action` during the call with this 0-based index"""
        self._actions[call_index] = action
        return self

    def __call__(self, seconds):
        index = len(self.calls)
        self.calls.append(seconds)
        action = self._actions.get(index)
        if action is not None:
            action()
        if len(self.calls) >= self.limit:
            self.cancel_flag.set()


@pytest.fixture
def line():
    """Active-high LED on GPIO 17"""
    return GpioLine.from_idle(LED_PIN, PinState.LOW)


@pytest.fixture
def gpio():
    gpio = MockGPIO()
    gpio.export(LED_PIN)
    gpio.setup_output(LED_PIN, PinState.LOW)
    return gpio


@pytest.fixture
def led(gpio, line):
    return LEDController(gpio, line)


@pytest.fixture
def cancel_flag():
    return CancellationFlag()


@pytest.fixture
def monitor_file(tmp_path):
    """Sentinel path - not created"""
    return tmp_path / "boot"


@pytest.fixture
def runtime(line, monitor_file):
    return RuntimeState(
        line=line,
        monitor_file=monitor_file,
        blink_interval=CLI_INTERVAL,
        poll_interval=0.1,
    )


@pytest.fixture
def scripted_sleep(cancel_flag):
    return ScriptedSleep(cancel_flag)
