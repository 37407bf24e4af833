"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Every value can be overridden from the environment or a .env file
- Import these settings in modules: from config.settings import POLL_INTERVAL
- Command-line arguments of ledd_service.py take precedence over these defaults
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag such as "1", "true", "yes" from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# BOOTLOADER ENVIRONMENT
# =============================================================================

# Command that dumps the bootloader environment as key=value lines
FW_PRINTENV_COMMAND = os.getenv("FW_PRINTENV_COMMAND", "fw_printenv")
FW_PRINTENV_TIMEOUT = float(os.getenv("FW_PRINTENV_TIMEOUT", "5.0"))  # seconds

# Only keys with this prefix describe the status LED (e.g. gpio_led_boot=17o)
GPIO_LED_KEY_PREFIX = os.getenv("GPIO_LED_KEY_PREFIX", "gpio_led_")

# Sort matching entries by key before picking the first one
FW_ENV_SORTED = _env_flag("FW_ENV_SORTED", True)

# =============================================================================
# GPIO CONFIGURATION
# =============================================================================

# Kernel sysfs GPIO control surface
GPIO_SYSFS_PATH = Path(os.getenv("GPIO_SYSFS_PATH", "/sys/class/gpio"))

# How long to wait for gpio<N>/ to appear after writing to export (seconds)
GPIO_EXPORT_TIMEOUT = float(os.getenv("GPIO_EXPORT_TIMEOUT", "1.0"))

# Backend selection: "real" (sysfs), "mock" (simulation), "auto" (detect)
GPIO_MODE = os.getenv("GPIO_MODE", "real")

# Use the level found on the pin at startup as the idle level
RESTORE_ORIGINAL_STATE = _env_flag("LEDD_RESTORE_ORIGINAL_STATE", False)

# =============================================================================
# WATCH LOOP CONFIGURATION
# =============================================================================

# Sentinel file whose existence makes the LED blink
DEFAULT_MONITOR_FILE = Path(os.getenv("LEDD_MONITOR_FILE", "/var/run/boot"))

# Idle poll period (seconds)
POLL_INTERVAL = float(os.getenv("POLL_INTERVAL", "0.1"))

# Only the first line of the sentinel file is read, bounded to this many bytes
INTERVAL_READ_MAX_BYTES = 64

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

SYSLOG_ADDRESS = os.getenv("LEDD_SYSLOG_ADDRESS", "/dev/log")
SYSLOG_IDENT = "led_blink_daemon"
LOG_LEVEL = os.getenv("LEDD_LOG_LEVEL", "INFO")
