"""
Sysfs GPIO Implementation

Concrete implementation of GPIOInterface on top of the kernel's legacy
/sys/class/gpio control files:

    <base>/export            write "<N>" to request a pin
    <base>/unexport          write "<N>" to release it
    <base>/gpio<N>/direction "high"/"low" configures an output
    <base>/gpio<N>/value     "0"/"1"

Every operation opens and closes the control file it needs; nothing is kept
open across calls because unexport/export cycles re-create the files.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from hardware.constants import (
    EXPORT_POLL_STEP,
    GPIO_EXPORT_TIMEOUT,
    GPIO_SYSFS_PATH,
    SYSFS_DIRECTION_FILE,
    SYSFS_DIRECTION_HIGH,
    SYSFS_DIRECTION_LOW,
    SYSFS_EXPORT_FILE,
    SYSFS_PIN_DIR_TEMPLATE,
    SYSFS_UNEXPORT_FILE,
    SYSFS_VALUE_FILE,
)
from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface, PinState


class SysfsGPIO(GPIOInterface):
    """
    GPIO implementation using the sysfs control surface.

    Args:
        base_path: Root of the control surface (defaults to /sys/class/gpio)
        export_timeout: Seconds to wait for gpio<N>/ after an export request
    """

    def __init__(
        self,
        base_path: Optional[Path] = None,
        export_timeout: float = GPIO_EXPORT_TIMEOUT,
    ):
        self.logger = logging.getLogger(__name__)
        self.base_path = Path(base_path) if base_path is not None else GPIO_SYSFS_PATH
        self.export_timeout = export_timeout

        if not self.base_path.is_dir():
            raise GPIOError(f"GPIO control surface {self.base_path} is not available")

        self.logger.debug(f"Sysfs GPIO initialized at {self.base_path}")

    def _pin_dir(self, pin: int) -> Path:
        return self.base_path / SYSFS_PIN_DIR_TEMPLATE.format(pin=pin)

    def _write_control(self, path: Path, value: str) -> None:
        try:
            with path.open("w") as handle:
                handle.write(value)
        except OSError as e:
            raise GPIOError(f"Failed to write {value!r} to {path}: {e}") from e

    def export(self, pin: int) -> None:
        """Request the pin and wait for its control directory"""
        pin_dir = self._pin_dir(pin)
        if pin_dir.is_dir():
            # Left exported by a previous run - reuse it
            self.logger.info(f"GPIO {pin} already exported")
            return

        self._write_control(self.base_path / SYSFS_EXPORT_FILE, str(pin))

        deadline = time.monotonic() + self.export_timeout
        while not pin_dir.is_dir():
            if time.monotonic() > deadline:
                # The export write went through, so the pin may still show up later
                self.unexport(pin)
                raise GPIOError(f"Timed out waiting for {pin_dir} to appear")
            time.sleep(EXPORT_POLL_STEP)

        self.logger.info(f"GPIO {pin} exported")

    def setup_output(self, pin: int, initial: PinState) -> None:
        """Configure pin as output starting at `initial`"""
        pin_dir = self._pin_dir(pin)
        if not pin_dir.is_dir():
            raise GPIOError(f"GPIO {pin} is not exported")

        direction = SYSFS_DIRECTION_HIGH if initial is PinState.HIGH else SYSFS_DIRECTION_LOW
        self._write_control(pin_dir / SYSFS_DIRECTION_FILE, direction)
        self.logger.debug(f"GPIO {pin} configured as OUTPUT ({direction})")

    def unexport(self, pin: int) -> None:
        """Release the pin - never raises"""
        try:
            self._write_control(self.base_path / SYSFS_UNEXPORT_FILE, str(pin))
            self.logger.info(f"GPIO {pin} unexported")
        except GPIOError as e:
            # Don't raise during cleanup - just log
            self.logger.warning(f"Failed to unexport GPIO {pin}: {e}")

    def write(self, pin: int, state: PinState) -> None:
        """Set output pin HIGH or LOW"""
        pin_dir = self._pin_dir(pin)
        if not pin_dir.is_dir():
            raise GPIOError(f"GPIO {pin} is not exported")
        # Don't log every write - too verbose for blinking LEDs
        self._write_control(pin_dir / SYSFS_VALUE_FILE, str(state.value))

    def read(self, pin: int) -> PinState:
        """Read pin level"""
        value_path = self._pin_dir(pin) / SYSFS_VALUE_FILE
        try:
            with value_path.open("r") as handle:
                raw = handle.read(1)
        except OSError as e:
            raise GPIOError(f"Failed to read {value_path}: {e}") from e

        if raw not in ("0", "1"):
            raise GPIOError(f"Unexpected value {raw!r} in {value_path}")
        return PinState.HIGH if raw == "1" else PinState.LOW

    def is_exported(self, pin: int) -> bool:
        return self._pin_dir(pin).is_dir()

    def is_available(self) -> bool:
        """Check if the sysfs control surface exists"""
        return (self.base_path / SYSFS_EXPORT_FILE).exists()
