"""
Runtime State

Everything the watch loop needs to know at run time, bundled in one object
that is passed explicitly instead of living in module globals.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from config.settings import POLL_INTERVAL
from hardware.models import GpioLine


class WatchState(Enum):
    """LED controller states"""

    IDLE = "idle"  # steady idle level, polling for the sentinel file
    BLINKING = "blinking"  # alternating levels while the sentinel file exists


@dataclass
class RuntimeState:
    """
    Mutable state of one daemon run.

    Attributes:
        line: Resolved LED pin and polarity (fixed for the run)
        monitor_file: Sentinel file whose existence triggers blinking
        blink_interval: Current half-period in seconds; starts at the
                        command-line value, updated from the sentinel file
        poll_interval: Idle poll period in seconds
        state: Current WatchState
    """

    line: GpioLine
    monitor_file: Path
    blink_interval: float
    poll_interval: float = POLL_INTERVAL
    state: WatchState = field(default=WatchState.IDLE)

    def __post_init__(self):
        """Ensure monitor_file is a Path object"""
        if not isinstance(self.monitor_file, Path):
            self.monitor_file = Path(self.monitor_file)
        if self.blink_interval <= 0:
            raise ValueError(f"Blink interval must be positive, got {self.blink_interval}")
