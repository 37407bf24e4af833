"""
Blink Interval Tests

Reading the half-period from the sentinel file's first line.
"""

import pytest

from core.interval import IntervalError, parse_interval, read_blink_interval


@pytest.mark.unit
@pytest.mark.parametrize("content, expected", [
    ("0.2", 0.2),
    ("0.2\n", 0.2),
    ("2", 2.0),
    ("  1.5 seconds\n", 1.5),
    (".25", 0.25),
    ("1e-1", 0.1),
    ("3.\nsecond line", 3.0),
])
def test_valid_intervals(tmp_path, content, expected):
    path = tmp_path / "boot"
    path.write_text(content)

    assert read_blink_interval(path) == pytest.approx(expected)


@pytest.mark.unit
@pytest.mark.parametrize("content", [
    "",
    "\n",
    "fast",
    "0",
    "-1",
    "0.0",
    "inf",
    "nan",
    "\n0.5",  # only the first line counts
])
def test_invalid_intervals(tmp_path, content):
    path = tmp_path / "boot"
    path.write_text(content)

    with pytest.raises(IntervalError):
        read_blink_interval(path)


@pytest.mark.unit
def test_missing_file(tmp_path):
    with pytest.raises(IntervalError, match="Failed to read"):
        read_blink_interval(tmp_path / "gone")


@pytest.mark.unit
def test_read_is_bounded(tmp_path):
    """A number past the read bound is never seen"""
    path = tmp_path / "boot"
    path.write_text(" " * 100 + "0.5")

    with pytest.raises(IntervalError):
        read_blink_interval(path, max_bytes=64)


@pytest.mark.unit
def test_binary_garbage_is_rejected(tmp_path):
    path = tmp_path / "boot"
    path.write_bytes(b"\xff\xfe\x00")

    with pytest.raises(IntervalError):
        read_blink_interval(path)


@pytest.mark.unit
def test_parse_interval_direct():
    assert parse_interval("0.75ms") == pytest.approx(0.75)
