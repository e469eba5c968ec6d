"""Default configuration values."""

from __future__ import annotations

DEFAULTS: dict = {
    # Reconciliation budget for radio toggles: number of state polls and the
    # pause between them.
    "poll_attempts": 15,
    "poll_interval_s": 1.0,
    # NetworkManager connection used for Wi-Fi tethering. Enabling Wi-Fi
    # stops it first when it is up or coming up.
    "hotspot_connection": "Hotspot",
    # When False the brightness rotation skips automatic mode entirely.
    "auto_brightness_available": True,
    # Brightness rotation stops (raw backlight units / percent of max).
    "min_brightness": 1,
    "default_brightness_percent": 40,
    # Backlight device under /sys/class/backlight. Empty selects the device
    # with the largest max_brightness.
    "backlight_device": "",
    # How often the settings store checks for external writes.
    "settings_poll_interval_s": 0.5,
    "notifications_enabled": True,
    "sleep_command": ["systemctl", "suspend"],
    "settings_command": ["nm-connection-editor"],
    "tether_settings_command": ["nm-connection-editor"],
}
