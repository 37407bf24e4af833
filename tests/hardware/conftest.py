"""
Test Configuration and Fixtures

Shared fixtures for the hardware tests: a mock GPIO, a fake sysfs tree
and a resolved LED line.

To use pytest:
    pip install -e .[test]
    pytest tests/hardware/
"""

import pytest

from hardware.implementations.mock_gpio import MockGPIO
from hardware.interfaces.gpio_interface import PinState
from hardware.models import GpioLine

LED_PIN = 17


# =============================================================================
# GPIO FIXTURES
# =============================================================================

@pytest.fixture
def mock_gpio():
    """Fresh MockGPIO for each test"""
    return MockGPIO()


@pytest.fixture
def exported_gpio(mock_gpio):
    """MockGPIO with the LED pin exported and configured as output (LOW)"""
    mock_gpio.export(LED_PIN)
    mock_gpio.setup_output(LED_PIN, PinState.LOW)
    return mock_gpio


@pytest.fixture
def fake_sysfs(tmp_path):
    """
    Minimal /sys/class/gpio lookalike.

    Contains the export/unexport control files only; use
    `make_pin_dir` to simulate an exported pin.
    """
    base = tmp_path / "gpio"
    base.mkdir()
    (base / "export").write_text("")
    (base / "unexport").write_text("")
    return base


@pytest.fixture
def make_pin_dir(fake_sysfs):
    """
    Factory creating gpio<pin>/ with direction and value files.

    Usage:
        def test_x(fake_sysfs, make_pin_dir):
            pin_dir = make_pin_dir(17, value="1")
    """
    def _make(pin, value="0"):
        pin_dir = fake_sysfs / f"gpio{pin}"
        pin_dir.mkdir()
        (pin_dir / "direction").write_text("in")
        (pin_dir / "value").write_text(value)
        return pin_dir

    return _make


@pytest.fixture
def active_high_line():
    return GpioLine.from_idle(LED_PIN, PinState.LOW)


@pytest.fixture
def active_low_line():
    return GpioLine.from_idle(LED_PIN, PinState.HIGH)


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.

        pytest -m unit          # Only unit tests
        pytest -m integration   # Only integration tests
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (may be slower)")
    config.addinivalue_line("markers", "slow: Slow tests (use sparingly)")
    config.addinivalue_line("markers", "hardware: Tests requiring real hardware")
