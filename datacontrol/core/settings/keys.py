"""Settings store keys and values shared with other brightness writers."""

from __future__ import annotations

SCREEN_BRIGHTNESS = "screen_brightness"
SCREEN_BRIGHTNESS_MODE = "screen_brightness_mode"
SCREEN_AUTO_BRIGHTNESS_ADJ = "screen_auto_brightness_adj"

SCREEN_BRIGHTNESS_MODE_MANUAL = 0
SCREEN_BRIGHTNESS_MODE_AUTOMATIC = 1

BRIGHTNESS_KEYS = (SCREEN_BRIGHTNESS, SCREEN_BRIGHTNESS_MODE, SCREEN_AUTO_BRIGHTNESS_ADJ)
