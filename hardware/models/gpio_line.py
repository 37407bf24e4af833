"""
GPIO Line Model

The single LED line the daemon owns: its kernel GPIO number plus the levels
that mean "off" (idle) and "on" (active) for the LED's polarity.
"""

from dataclasses import dataclass

from hardware.interfaces.gpio_interface import PinState


@dataclass(frozen=True)
class GpioLine:
    """
    Resolved LED line, immutable once discovered at startup.

    Active-high LEDs idle LOW, active-low LEDs idle HIGH; the active level is
    always the opposite of the idle level.
    """

    pin: int
    idle_value: PinState
    active_value: PinState

    def __post_init__(self):
        if self.pin < 0:
            raise ValueError(f"GPIO pin must be non-negative, got {self.pin}")
        if self.idle_value == self.active_value:
            raise ValueError("Idle and active levels must differ")

    @classmethod
    def from_idle(cls, pin: int, idle_value: PinState) -> "GpioLine":
        """Build a line from its idle level"""
        return cls(pin=pin, idle_value=idle_value, active_value=idle_value.inverted)

    @property
    def active_low(self) -> bool:
        """True when the LED lights up on logic 0"""
        return self.active_value is PinState.LOW
