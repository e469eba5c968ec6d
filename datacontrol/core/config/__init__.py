"""DataControl configuration.

Groups the config manager and the file/path helpers it is built on.
"""

from __future__ import annotations

from .config import Config
from .file_storage import load_json_settings, save_json_settings_atomic
from .paths import config_dir, config_file_path, settings_file_path


__all__ = [
    "Config",
    "config_dir",
    "config_file_path",
    "settings_file_path",
    "load_json_settings",
    "save_json_settings_atomic",
]
