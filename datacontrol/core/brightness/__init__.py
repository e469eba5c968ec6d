from .backlight import BacklightDevice, find_backlight
from .controller import (
    BrightnessController,
    BrightnessDisplay,
    BrightnessMode,
    BrightnessState,
    next_brightness_state,
)
from .limits import BrightnessLimits, make_limits, read_brightness_limits

__all__ = [
    "BacklightDevice",
    "BrightnessController",
    "BrightnessDisplay",
    "BrightnessLimits",
    "BrightnessMode",
    "BrightnessState",
    "find_backlight",
    "make_limits",
    "next_brightness_state",
    "read_brightness_limits",
]
