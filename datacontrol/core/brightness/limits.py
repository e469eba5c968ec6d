from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .backlight import BacklightDevice

FALLBACK_MAXIMUM = 255

HALF_BRIGHTNESS_THRESHOLD = 0.3
FULL_BRIGHTNESS_THRESHOLD = 0.8


@dataclass(frozen=True)
class BrightnessLimits:
    minimum: int
    default: int
    maximum: int

    @property
    def half_threshold(self) -> int:
        """Level above which the icon shows half and the indicator is on."""
        return int(self.maximum * HALF_BRIGHTNESS_THRESHOLD)

    @property
    def full_threshold(self) -> int:
        return int(self.maximum * FULL_BRIGHTNESS_THRESHOLD)


def make_limits(*, maximum: int, minimum: int = 1, default_percent: int = 40) -> BrightnessLimits:
    """Build limits with minimum <= default <= maximum enforced."""

    maximum = max(1, int(maximum))
    minimum = max(0, min(int(minimum), maximum))
    default = int(round(maximum * max(1, min(100, int(default_percent))) / 100.0))
    default = max(minimum, min(default, maximum))
    return BrightnessLimits(minimum=minimum, default=default, maximum=maximum)


def read_brightness_limits(config: Any, device: Optional[BacklightDevice]) -> BrightnessLimits:
    maximum = device.max_brightness() if device is not None else None
    return make_limits(
        maximum=maximum or FALLBACK_MAXIMUM,
        minimum=int(getattr(config, "min_brightness", 1)),
        default_percent=int(getattr(config, "default_brightness_percent", 40)),
    )
