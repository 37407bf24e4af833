"""
Hardware Module Integration Tests

Tests cover:
1. Mock implementation honours the GPIO contract
2. LEDController maps idle/active onto the line's polarity
3. Write failures are logged, not raised, and tracked for retry
4. Factory creates the right implementation
"""

import pytest

from hardware.controllers.led_controller import LEDController
from hardware.factory import HardwareFactory, create_gpio
from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.sysfs_gpio import SysfsGPIO
from hardware.interfaces.gpio_interface import GPIOError, PinState
from hardware.models import GpioLine

PIN = 17


class TestMockGPIO:
    """Mock implementation behaves like the sysfs backend"""

    def test_write_requires_export(self, mock_gpio):
        with pytest.raises(GPIOError):
            mock_gpio.write(PIN, PinState.HIGH)

    def test_write_requires_output_mode(self, mock_gpio):
        mock_gpio.export(PIN)
        with pytest.raises(GPIOError):
            mock_gpio.write(PIN, PinState.HIGH)

    def test_setup_output_sets_initial_level(self, mock_gpio):
        mock_gpio.export(PIN)
        mock_gpio.setup_output(PIN, PinState.HIGH)
        assert mock_gpio.read(PIN) is PinState.HIGH

    def test_initial_levels_visible_before_setup(self):
        gpio = MockGPIO(initial_levels={PIN: PinState.HIGH})
        gpio.export(PIN)
        assert gpio.read(PIN) is PinState.HIGH

    def test_same_value_twice_is_idempotent(self, exported_gpio):
        exported_gpio.write(PIN, PinState.HIGH)
        exported_gpio.write(PIN, PinState.HIGH)

        assert exported_gpio.get_pin_state(PIN) is PinState.HIGH
        assert exported_gpio.written_states(PIN) == [PinState.HIGH, PinState.HIGH]

    def test_unexport_releases_pin(self, exported_gpio):
        exported_gpio.unexport(PIN)

        assert not exported_gpio.is_exported(PIN)
        assert exported_gpio.unexport_calls == [PIN]

    def test_unexport_unknown_pin_does_not_raise(self, mock_gpio):
        mock_gpio.unexport(PIN)
        assert mock_gpio.unexport_calls == [PIN]


class TestGpioLine:
    """Polarity invariants of the line model"""

    @pytest.mark.parametrize("idle", [PinState.LOW, PinState.HIGH])
    def test_levels_sum_to_one(self, idle):
        line = GpioLine.from_idle(PIN, idle)
        assert line.idle_value.value + line.active_value.value == 1

    def test_active_low_flag(self, active_low_line, active_high_line):
        assert active_low_line.active_low is True
        assert active_high_line.active_low is False

    def test_negative_pin_rejected(self):
        with pytest.raises(ValueError):
            GpioLine.from_idle(-1, PinState.LOW)

    def test_equal_levels_rejected(self):
        with pytest.raises(ValueError):
            GpioLine(pin=PIN, idle_value=PinState.LOW, active_value=PinState.LOW)


class TestLEDController:
    """LED controller on top of MockGPIO"""

    def test_active_high_levels(self, exported_gpio, active_high_line):
        led = LEDController(exported_gpio, active_high_line)

        led.set_active()
        assert exported_gpio.get_pin_state(PIN) is PinState.HIGH
        led.set_idle()
        assert exported_gpio.get_pin_state(PIN) is PinState.LOW

    def test_active_low_levels(self, exported_gpio, active_low_line):
        led = LEDController(exported_gpio, active_low_line)

        led.set_active()
        assert exported_gpio.get_pin_state(PIN) is PinState.LOW
        led.set_idle()
        assert exported_gpio.get_pin_state(PIN) is PinState.HIGH

    def test_idle_confirmed_tracks_last_write(self, exported_gpio, active_high_line):
        led = LEDController(exported_gpio, active_high_line)
        assert led.idle_confirmed is False

        led.set_idle()
        assert led.idle_confirmed is True

        led.set_active()
        assert led.idle_confirmed is False

    def test_write_failure_is_logged_not_raised(self, exported_gpio, active_high_line, caplog):
        led = LEDController(exported_gpio, active_high_line)
        led.set_idle()
        exported_gpio.fail_writes = True

        assert led.set_idle() is False
        assert led.idle_confirmed is False
        assert "Failed to set GPIO 17" in caplog.text

        # Next scheduled write recovers
        exported_gpio.fail_writes = False
        assert led.set_idle() is True
        assert led.idle_confirmed is True

    def test_cleanup_forces_idle_and_unexports_once(self, exported_gpio, active_low_line):
        led = LEDController(exported_gpio, active_low_line)
        led.set_active()

        led.cleanup()
        led.cleanup()

        assert exported_gpio.written_states(PIN)[-1] is PinState.HIGH
        assert exported_gpio.unexport_calls == [PIN]

    def test_cleanup_unexports_even_if_idle_write_fails(self, exported_gpio, active_high_line):
        led = LEDController(exported_gpio, active_high_line)
        exported_gpio.fail_writes = True

        led.cleanup()

        assert exported_gpio.unexport_calls == [PIN]

    def test_context_manager_cleans_up(self, exported_gpio, active_high_line):
        with LEDController(exported_gpio, active_high_line) as led:
            led.set_active()

        assert exported_gpio.unexport_calls == [PIN]

    def test_get_status(self, exported_gpio, active_low_line):
        led = LEDController(exported_gpio, active_low_line)
        led.set_idle()

        status = led.get_status()
        assert status["pin"] == PIN
        assert status["active_low"] is True
        assert status["last_written"] == 1
        assert status["idle_confirmed"] is True


class TestHardwareFactory:
    """Factory selects implementations"""

    def test_factory_mock_mode(self):
        assert isinstance(HardwareFactory.create_gpio(mode="mock"), MockGPIO)

    def test_factory_real_mode_with_sysfs(self, fake_sysfs):
        gpio = HardwareFactory.create_gpio(mode="real", base_path=fake_sysfs)
        assert isinstance(gpio, SysfsGPIO)

    def test_factory_real_mode_without_sysfs_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            HardwareFactory.create_gpio(mode="real", base_path=tmp_path / "missing")

    def test_factory_auto_mode_falls_back_to_mock(self, tmp_path):
        gpio = HardwareFactory.create_gpio(mode="auto", base_path=tmp_path / "missing")
        assert isinstance(gpio, MockGPIO)

    def test_factory_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            HardwareFactory.create_gpio(mode="pigpio")

    def test_create_gpio_force_mock(self):
        assert isinstance(create_gpio(force_mock=True), MockGPIO)
