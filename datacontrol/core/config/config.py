"""DataControl Config implementation."""

from __future__ import annotations

import logging

from ._props import argv_prop, bool_prop, float_prop, int_prop, str_prop
from .defaults import DEFAULTS as _DEFAULTS
from .file_storage import load_json_settings, save_json_settings_atomic
from .paths import config_dir, config_file_path

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for DataControl."""

    DEFAULTS = _DEFAULTS

    def __init__(self):
        # Recompute at runtime so test harnesses can set env vars in conftest.
        self.CONFIG_DIR = config_dir()
        self.CONFIG_FILE = config_file_path()
        loaded = self._load()
        self._settings = loaded if loaded is not None else dict(self.DEFAULTS)

    def _load(self, *, retries: int = 3, retry_delay: float = 0.02):
        """Load settings from file.

        Returns None if the file stayed unreadable after retries.
        """

        return load_json_settings(
            path=self.CONFIG_FILE,
            defaults=self.DEFAULTS,
            retries=retries,
            retry_delay=retry_delay,
            logger=logger,
        )

    def reload(self) -> None:
        loaded = self._load()
        # If the file was transiently unreadable, keep the previous in-memory settings.
        if loaded is not None:
            self._settings = loaded

    def _save(self) -> None:
        save_json_settings_atomic(path=self.CONFIG_FILE, settings=self._settings, logger=logger)

    # ---- reconciliation

    poll_attempts = int_prop("poll_attempts", default=15, min_v=1, max_v=120)
    poll_interval_s = float_prop("poll_interval_s", default=1.0, min_v=0.0)

    # ---- radios

    hotspot_connection = str_prop("hotspot_connection", default="Hotspot")

    # ---- brightness

    auto_brightness_available = bool_prop("auto_brightness_available", default=True)
    min_brightness = int_prop("min_brightness", default=1, min_v=0)
    default_brightness_percent = int_prop("default_brightness_percent", default=40, min_v=1, max_v=100)
    backlight_device = str_prop("backlight_device", default="")

    # ---- observer / shell

    settings_poll_interval_s = float_prop("settings_poll_interval_s", default=0.5, min_v=0.05)
    notifications_enabled = bool_prop("notifications_enabled", default=True)
    sleep_command = argv_prop("sleep_command", default=["systemctl", "suspend"])
    settings_command = argv_prop("settings_command", default=["nm-connection-editor"])
    tether_settings_command = argv_prop("tether_settings_command", default=["nm-connection-editor"])
