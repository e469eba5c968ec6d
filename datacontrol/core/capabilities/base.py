from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class DisplayState(str, Enum):
    OFF = "off"
    ON = "on"
    TRANSITIONING = "transitioning"


def _always_present() -> bool:
    return True


@dataclass(frozen=True)
class CapabilitySpec:
    """Everything that differs between toggleable radios.

    `query` returns the live on/off state, `command` asks the subsystem to
    switch (fire-and-forget; the reconciliation loop confirms), and the
    optional `precondition` runs with the desired state right before the
    command. `is_present` gates toggles when the hardware or tool is missing.
    """

    key: str
    label: str
    query: Callable[[], bool]
    command: Callable[[bool], None]
    precondition: Callable[[bool], None] | None = None
    is_present: Callable[[], bool] = _always_present
