"""Brightness rotation: AUTO -> MINIMUM -> DEFAULT -> MAXIMUM -> AUTO.

Technically not a toggle. The current level and mode live in the shared
settings store, so any other writer moves this rotation too; reads are done
fresh on every toggle and every render.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from ..settings.keys import (
    SCREEN_BRIGHTNESS,
    SCREEN_BRIGHTNESS_MODE,
    SCREEN_BRIGHTNESS_MODE_AUTOMATIC,
    SCREEN_BRIGHTNESS_MODE_MANUAL,
)
from ..settings.store import SettingNotFoundError, SettingsStore
from .limits import BrightnessLimits

logger = logging.getLogger(__name__)


class BrightnessMode(IntEnum):
    MANUAL = SCREEN_BRIGHTNESS_MODE_MANUAL
    AUTOMATIC = SCREEN_BRIGHTNESS_MODE_AUTOMATIC


@dataclass(frozen=True)
class BrightnessState:
    mode: BrightnessMode
    level: int


@dataclass(frozen=True)
class BrightnessDisplay:
    icon: str
    indicator_on: bool
    description: str


def next_brightness_state(current: BrightnessState, limits: BrightnessLimits) -> BrightnessState:
    if current.mode == BrightnessMode.AUTOMATIC:
        return BrightnessState(BrightnessMode.MANUAL, limits.minimum)
    if current.level < limits.default:
        return BrightnessState(BrightnessMode.MANUAL, limits.default)
    if current.level < limits.maximum:
        return BrightnessState(BrightnessMode.MANUAL, limits.maximum)
    return BrightnessState(BrightnessMode.AUTOMATIC, limits.minimum)


class BrightnessController:
    def __init__(
        self,
        store: SettingsStore,
        *,
        limits: BrightnessLimits,
        auto_available: bool = True,
        preview: Optional[Callable[[int], object]] = None,
    ):
        self.store = store
        self.limits = limits
        self.auto_available = bool(auto_available)
        self._preview = preview

    # ---- reads (never raise)

    def read_level(self) -> int:
        try:
            return int(self.store.get_int(SCREEN_BRIGHTNESS))
        except SettingNotFoundError:
            return 0

    def read_auto_mode(self) -> bool:
        if not self.auto_available:
            return False
        try:
            return self.store.get_int(SCREEN_BRIGHTNESS_MODE) == SCREEN_BRIGHTNESS_MODE_AUTOMATIC
        except SettingNotFoundError as exc:
            logger.debug("Brightness mode unavailable: %s", exc)
            return False

    def current_state(self) -> BrightnessState:
        mode = BrightnessMode.AUTOMATIC if self.read_auto_mode() else BrightnessMode.MANUAL
        return BrightnessState(mode, self.read_level())

    # ---- toggle

    def toggle(self) -> BrightnessState:
        """Advance the rotation and persist it.

        Missing or unreadable settings count as level 0 in manual mode, so a
        fresh store starts the rotation at the default level.
        """

        level = self.read_level()
        mode = BrightnessMode.MANUAL
        if self.auto_available:
            try:
                mode = BrightnessMode(self.store.get_int(SCREEN_BRIGHTNESS_MODE))
            except (SettingNotFoundError, ValueError) as exc:
                logger.debug("toggle_brightness: mode unreadable, assuming manual: %s", exc)

        new = next_brightness_state(BrightnessState(mode, level), self.limits)
        if not self.auto_available:
            new = BrightnessState(BrightnessMode.MANUAL, new.level)

        if new.mode == BrightnessMode.MANUAL and self._preview is not None:
            try:
                self._preview(new.level)
            except Exception as exc:
                logger.debug("Brightness preview failed: %s", exc)

        if self.auto_available:
            self.store.put_int(SCREEN_BRIGHTNESS_MODE, int(new.mode))
        self.store.put_int(SCREEN_BRIGHTNESS, int(new.level))

        logger.debug("Brightness now %s level=%d", new.mode.name, new.level)
        return new

    # ---- display

    def display(self) -> BrightnessDisplay:
        if self.read_auto_mode():
            return BrightnessDisplay(icon="auto", indicator_on=True, description="Brightness: auto")

        level = self.read_level()
        if level > self.limits.full_threshold:
            icon = "full"
        elif level > self.limits.half_threshold:
            icon = "half"
        else:
            icon = "off"
        return BrightnessDisplay(
            icon=icon,
            indicator_on=level > self.limits.half_threshold,
            description=f"Brightness: {icon}",
        )
