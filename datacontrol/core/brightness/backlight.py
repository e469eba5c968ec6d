"""Kernel backlight access used for live brightness preview."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..capabilities.commands import run_command, tool_available
from ..utils.exceptions import is_device_busy, is_permission_denied

logger = logging.getLogger(__name__)


def _hardware_allowed() -> bool:
    return os.environ.get("DATACONTROL_ALLOW_HARDWARE") == "1"


def backlight_root() -> Path:
    # Test hook: allow overriding the sysfs root.
    root = os.environ.get("DATACONTROL_SYSFS_BACKLIGHT_ROOT")

    # Under pytest, never touch the real sysfs tree unless explicitly allowed.
    if root is None and os.environ.get("PYTEST_CURRENT_TEST") and not _hardware_allowed():
        return Path("/nonexistent-datacontrol-test-backlight")

    return Path(root or "/sys/class/backlight")


def _read_int(path: Path) -> Optional[int]:
    try:
        return int(path.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return None


@dataclass(frozen=True)
class BacklightDevice:
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def max_brightness(self) -> Optional[int]:
        return _read_int(self.path / "max_brightness")

    def brightness(self) -> Optional[int]:
        return _read_int(self.path / "brightness")

    def write_brightness(self, level: int) -> bool:
        """Write the live level; falls back to brightnessctl without permission."""

        target = self.path / "brightness"
        try:
            target.write_text(str(int(level)), encoding="utf-8")
            return True
        except OSError as exc:
            if is_device_busy(exc):
                logger.debug("Backlight %s busy, skipping preview", self.name)
                return False
            if not is_permission_denied(exc):
                logger.warning("Failed to write backlight %s: %s", self.name, exc)
                return False

        if not tool_available("brightnessctl"):
            logger.debug("No permission for %s and brightnessctl is not installed", target)
            return False
        return run_command(["brightnessctl", "-q", "-d", self.name, "set", str(int(level))]) is not None


def find_backlight(preferred: str = "") -> Optional[BacklightDevice]:
    """Pick the configured device, else the one with the largest range."""

    root = backlight_root()
    if not root.exists():
        return None

    if preferred:
        cand = root / preferred
        if (cand / "max_brightness").exists():
            return BacklightDevice(cand)
        logger.warning("Configured backlight %s not found under %s", preferred, root)

    best: Optional[BacklightDevice] = None
    best_max = -1
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError:
        return None
    for child in children:
        dev = BacklightDevice(child)
        max_b = dev.max_brightness()
        if max_b is None or max_b <= 0:
            continue
        if max_b > best_max:
            best, best_max = dev, max_b
    return best
