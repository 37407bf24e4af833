"""
Polarity Resolver

Discovers which GPIO drives the status LED, and with which polarity, from the
bootloader environment.

The environment is dumped by `fw_printenv` as `key=value` lines. The LED is
described by the first key starting with `gpio_led_`, e.g.:

    gpio_led_status=17O     pin 17, active-high
    gpio_led_status=17o     pin 17, active-low
    gpio_led_status=17      pin 17, active-high (default)

The value starts with the pin number; the rest of the value may carry the
polarity marker.
"""

import logging
import re
import shlex
import subprocess
from typing import Iterable, Optional, Union

from config.settings import (
    FW_ENV_SORTED,
    FW_PRINTENV_COMMAND,
    FW_PRINTENV_TIMEOUT,
    GPIO_LED_KEY_PREFIX,
)
from hardware.interfaces.gpio_interface import PinState
from hardware.models import GpioLine

ACTIVE_LOW_MARKER = "o"
ACTIVE_HIGH_MARKER = "O"

# Optional whitespace, optional sign, digits; the rest is the suffix
_PIN_PREFIX = re.compile(r"\s*([+-]?\d+)(.*)", re.DOTALL)

logger = logging.getLogger(__name__)


def parse_polarity(suffix: str) -> tuple[PinState, PinState]:
    """
    Derive (idle, active) levels from the text following the pin number.

    Lowercase "o" means active-low and takes precedence over uppercase "O"
    (active-high). Without any marker the LED is active-high.
    """
    if ACTIVE_LOW_MARKER in suffix:
        return PinState.HIGH, PinState.LOW
    if ACTIVE_HIGH_MARKER in suffix:
        return PinState.LOW, PinState.HIGH
    return PinState.LOW, PinState.HIGH


def parse_env_lines(
    lines: Iterable[str],
    key_prefix: str = GPIO_LED_KEY_PREFIX,
    sort_entries: bool = FW_ENV_SORTED,
) -> Optional[GpioLine]:
    """
    Pick the LED line out of environment dump lines.

    Args:
        lines: Raw `key=value` lines
        key_prefix: Only keys starting with this prefix are considered
        sort_entries: Order candidates by key first, for reproducible
                      results when several LEDs are described

    Returns:
        The first valid non-negative pin, or None if no line matches
    """
    candidates = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        key, sep, value = line.partition("=")
        if not sep or not key.startswith(key_prefix):
            continue
        candidates.append((key, value))

    if sort_entries:
        candidates.sort(key=lambda entry: entry[0])

    for key, value in candidates:
        match = _PIN_PREFIX.match(value)
        if match is None:
            logger.debug(f"Ignoring {key}: no pin number in {value!r}")
            continue

        pin = int(match.group(1))
        if pin < 0:
            logger.debug(f"Ignoring {key}: negative pin {pin}")
            continue

        idle, active = parse_polarity(match.group(2))
        logger.info(
            f"Status LED from {key}: GPIO {pin}, "
            f"{'active-low' if active is PinState.LOW else 'active-high'}",
        )
        return GpioLine(pin=pin, idle_value=idle, active_value=active)

    return None


class PolarityResolver:
    """
    Resolves the LED GpioLine by querying the bootloader environment.

    Usage:
        line = PolarityResolver().resolve()
        if line is None:
            ...  # fatal: no LED to drive
    """

    def __init__(
        self,
        command: Union[str, list[str], None] = None,
        key_prefix: str = GPIO_LED_KEY_PREFIX,
        sort_entries: bool = FW_ENV_SORTED,
        timeout: float = FW_PRINTENV_TIMEOUT,
    ):
        self.logger = logging.getLogger(__name__)
        command = FW_PRINTENV_COMMAND if command is None else command
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.key_prefix = key_prefix
        self.sort_entries = sort_entries
        self.timeout = timeout

    def _dump_environment(self) -> Optional[list[str]]:
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            self.logger.error(f"Failed to run {self.command[0]}: command not found")
            return None
        except subprocess.TimeoutExpired:
            self.logger.error(f"{self.command[0]} timed out after {self.timeout}s")
            return None
        except subprocess.CalledProcessError as e:
            self.logger.error(
                f"{self.command[0]} failed with exit code {e.returncode}: "
                f"{(e.stderr or '').strip()}",
            )
            return None
        except OSError as e:
            self.logger.error(f"Failed to run {self.command[0]}: {e}")
            return None

        return result.stdout.splitlines()

    def resolve(self) -> Optional[GpioLine]:
        """
        Query the environment store once.

        Returns:
            The resolved GpioLine, or None (already logged) when the command
            cannot be run or no `gpio_led_` entry carries a usable pin
        """
        lines = self._dump_environment()
        if lines is None:
            return None

        line = parse_env_lines(lines, self.key_prefix, self.sort_entries)
        if line is None:
            self.logger.error(f"No {self.key_prefix} entries found in {self.command[0]}")
        return line
