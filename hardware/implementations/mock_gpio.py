"""
Mock GPIO Implementation

Simulated GPIO for development and testing without board hardware.
Allows you to run the daemon on a laptop or a CI server.

This is a "Fake": it keeps real pin state in memory and enforces the same
rules as the sysfs backend (a pin must be exported before it is driven).
"""

import logging
from typing import Optional

from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface, PinState


class MockGPIO(GPIOInterface):
    """
    Simulated GPIO that mimics the sysfs behavior.

    Args:
        initial_levels: Level each pin reports before it is configured,
                        simulating whatever the bootloader left on the line.
                        Pins not listed start LOW.
    """

    def __init__(self, initial_levels: Optional[dict[int, PinState]] = None):
        self.logger = logging.getLogger(__name__)

        # Key: pin number, Value: dict with pin info
        self._pins: dict[int, dict] = {}
        self._initial_levels = dict(initial_levels or {})

        # Every successful write, in order: (pin, state)
        self.write_history: list[tuple[int, PinState]] = []
        self.unexport_calls: list[int] = []

        # Failure injection for tests
        self.fail_export = False
        self.fail_writes = False

        self.logger.info("Mock GPIO initialized (simulation mode)")

    def export(self, pin: int) -> None:
        if self.fail_export:
            raise GPIOError(f"[MOCK] Export of GPIO {pin} refused")
        if pin in self._pins:
            return
        self._pins[pin] = {
            'mode': 'input',
            'state': self._initial_levels.get(pin, PinState.LOW),
        }
        self.logger.debug(f"[MOCK] GPIO {pin} exported")

    def setup_output(self, pin: int, initial: PinState) -> None:
        if pin not in self._pins:
            raise GPIOError(f"GPIO {pin} is not exported")
        self._pins[pin]['mode'] = 'output'
        self._pins[pin]['state'] = initial
        self.logger.debug(f"[MOCK] GPIO {pin} configured as OUTPUT ({initial.name})")

    def unexport(self, pin: int) -> None:
        self.unexport_calls.append(pin)
        if self._pins.pop(pin, None) is None:
            self.logger.warning(f"[MOCK] GPIO {pin} was not exported")
            return
        self.logger.info(f"[MOCK] GPIO {pin} unexported")

    def write(self, pin: int, state: PinState) -> None:
        if self.fail_writes:
            raise GPIOError(f"[MOCK] Write to GPIO {pin} failed")
        if pin not in self._pins:
            raise GPIOError(f"GPIO {pin} is not exported")
        if self._pins[pin]['mode'] != 'output':
            raise GPIOError(f"GPIO {pin} not configured as output")

        old_state = self._pins[pin]['state']
        self._pins[pin]['state'] = state
        self.write_history.append((pin, state))

        if old_state != state:
            self.logger.debug(f"[MOCK] GPIO {pin}: {old_state.name} -> {state.name}")

    def read(self, pin: int) -> PinState:
        if pin not in self._pins:
            raise GPIOError(f"GPIO {pin} is not exported")
        return self._pins[pin]['state']

    def is_exported(self, pin: int) -> bool:
        return pin in self._pins

    def is_available(self) -> bool:
        """Mock GPIO is always "available" (it's simulated)"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS (not part of GPIOInterface)
    # =========================================================================

    def get_pin_state(self, pin: int) -> PinState:
        """Current state of an exported pin"""
        if pin not in self._pins:
            raise GPIOError(f"GPIO {pin} is not exported")
        return self._pins[pin]['state']

    def written_states(self, pin: int) -> list[PinState]:
        """States successfully written to `pin`, oldest first"""
        return [state for written_pin, state in self.write_history if written_pin == pin]
