"""
GPIO Interface - Abstract Hardware Layer

This defines the contract (interface) that any GPIO implementation must follow.
The daemon only ever drives a single output line, so the contract covers the
lifecycle of one exported pin: export, configure as output, write/read its
level, and release it again.

Implementations:
- SysfsGPIO: kernel /sys/class/gpio control files (real hardware)
- MockGPIO: in-memory simulation for development and tests
"""

from abc import ABC, abstractmethod
from enum import Enum


class PinState(Enum):
    """Digital pin states"""

    LOW = 0  # logic 0
    HIGH = 1  # logic 1

    @property
    def inverted(self) -> "PinState":
        """The opposite logic level"""
        return PinState.LOW if self is PinState.HIGH else PinState.HIGH


class GPIOInterface(ABC):
    """
    Abstract base class for GPIO operations.

    Every call is self-contained: no handle is kept open between calls, the
    underlying control files may disappear and reappear with export cycles.
    """

    @abstractmethod
    def export(self, pin: int) -> None:
        """
        Ask the OS to make a pin available to userspace.

        Args:
            pin: Kernel GPIO number

        Raises:
            GPIOError: If the pin cannot be exported
        """

    @abstractmethod
    def setup_output(self, pin: int, initial: PinState) -> None:
        """
        Configure an exported pin as an output driven at `initial`.

        Args:
            pin: Kernel GPIO number
            initial: Level the output starts at

        Raises:
            GPIOError: If the direction cannot be set
        """

    @abstractmethod
    def unexport(self, pin: int) -> None:
        """
        Release a pin. Best effort: failures are logged, never raised.

        Args:
            pin: Kernel GPIO number
        """

    @abstractmethod
    def write(self, pin: int, state: PinState) -> None:
        """
        Set an output pin to HIGH or LOW.

        Writing the same state twice is harmless.

        Args:
            pin: Kernel GPIO number
            state: Desired pin state

        Raises:
            GPIOError: If the pin isn't exported or the write fails
        """

    @abstractmethod
    def read(self, pin: int) -> PinState:
        """
        Read the current logic level of a pin.

        Args:
            pin: Kernel GPIO number

        Returns:
            Current pin state (HIGH/LOW)

        Raises:
            GPIOError: If the pin isn't exported or the read fails
        """

    @abstractmethod
    def is_exported(self, pin: int) -> bool:
        """Check whether the pin is currently exported."""

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if GPIO hardware is actually available.

        Returns:
            True if running on real hardware, False if simulated
        """


class GPIOError(Exception):
    """Raised when a GPIO control operation fails."""
