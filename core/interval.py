"""
Blink Interval Source

The sentinel file may carry the blink half-period, in seconds, on its first
line ("0.25", "2", "1.5e-1 fast" ...). Only a bounded prefix of the file is
read and only the leading number counts.
"""

import math
import re
from pathlib import Path
from typing import Union

from config.settings import INTERVAL_READ_MAX_BYTES

# Decimal float: sign, digits, fraction, exponent
DECIMAL_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"

# Leading number only, trailing text ignored
_LEADING_FLOAT = re.compile(rf"\s*({DECIMAL_NUMBER})")


class IntervalError(Exception):
    """Raised when the sentinel file does not provide a usable interval."""


def parse_interval(text: str) -> float:
    """
    Parse the leading positive number of `text`.

    Raises:
        IntervalError: No leading number, or not a finite positive value
    """
    match = _LEADING_FLOAT.match(text)
    if match is None:
        raise IntervalError(f"No blink interval in {text.strip()!r}")

    value = float(match.group(1))
    if not math.isfinite(value) or value <= 0:
        raise IntervalError(f"Invalid blink interval value: {match.group(1)}")
    return value


def read_blink_interval(
    path: Union[str, Path],
    max_bytes: int = INTERVAL_READ_MAX_BYTES,
) -> float:
    """
    Read the blink interval from the first line of `path`.

    Args:
        path: Sentinel file
        max_bytes: Upper bound on how much of the file is read

    Returns:
        Interval in seconds (> 0)

    Raises:
        IntervalError: File can't be opened/read, or holds no valid interval
    """
    try:
        with open(path, "rb") as handle:
            data = handle.read(max_bytes)
    except OSError as e:
        raise IntervalError(f"Failed to read monitored file {path}: {e}") from e

    first_line = data.split(b"\n", 1)[0].decode("ascii", errors="replace")
    return parse_interval(first_line)
