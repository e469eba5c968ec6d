"""Config path helpers.

Kept separate from the Config object so the settings store can share them.
"""

from __future__ import annotations

import os
from pathlib import Path


def config_dir() -> Path:
    """Return the directory used for DataControl configuration.

    Priority:
    - DATACONTROL_CONFIG_DIR
    - XDG_CONFIG_HOME/datacontrol
    - ~/.config/datacontrol
    """

    p = os.environ.get("DATACONTROL_CONFIG_DIR")
    if p:
        return Path(p)

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "datacontrol"

    return Path.home() / ".config" / "datacontrol"


def config_file_path() -> Path:
    """Return the config.json path.

    Priority:
    - DATACONTROL_CONFIG_PATH (explicit file override)
    - config_dir()/config.json
    """

    p = os.environ.get("DATACONTROL_CONFIG_PATH")
    if p:
        return Path(p)
    return config_dir() / "config.json"


def settings_file_path() -> Path:
    """Return the path of the key/value settings store (brightness etc.)."""

    p = os.environ.get("DATACONTROL_SETTINGS_PATH")
    if p:
        return Path(p)
    return config_dir() / "settings.json"
