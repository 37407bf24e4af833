"""
Hardware Constants

Centralizes the file names and timing values of the GPIO control surface so
the implementations never spell out magic strings.
"""

from config.settings import GPIO_EXPORT_TIMEOUT, GPIO_SYSFS_PATH

# =============================================================================
# SYSFS GPIO LAYOUT
# =============================================================================
# <base>/export, <base>/unexport and <base>/gpio<N>/{direction,value}
# GPIO_SYSFS_PATH comes from config/settings.py - change it there

SYSFS_EXPORT_FILE = "export"
SYSFS_UNEXPORT_FILE = "unexport"
SYSFS_DIRECTION_FILE = "direction"
SYSFS_VALUE_FILE = "value"
SYSFS_PIN_DIR_TEMPLATE = "gpio{pin}"

# Writing "high"/"low" to direction configures an output without a glitch
SYSFS_DIRECTION_HIGH = "high"
SYSFS_DIRECTION_LOW = "low"


# =============================================================================
# EXPORT TIMING
# =============================================================================

# udev may need a moment to create gpio<N>/ after the export write
EXPORT_POLL_STEP = 0.01  # seconds

__all__ = [
    "EXPORT_POLL_STEP",
    "GPIO_EXPORT_TIMEOUT",
    "GPIO_SYSFS_PATH",
    "SYSFS_DIRECTION_FILE",
    "SYSFS_DIRECTION_HIGH",
    "SYSFS_DIRECTION_LOW",
    "SYSFS_EXPORT_FILE",
    "SYSFS_PIN_DIR_TEMPLATE",
    "SYSFS_UNEXPORT_FILE",
    "SYSFS_VALUE_FILE",
]
