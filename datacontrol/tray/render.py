"""Pure render composition: live reads in, one immutable snapshot out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from datacontrol.core.brightness.controller import BrightnessDisplay
from datacontrol.core.capabilities.base import DisplayState

INDICATOR_OFF = "off"
INDICATOR_ON = "on"
INDICATOR_MID = "mid"

_INDICATORS = {
    DisplayState.OFF: INDICATOR_OFF,
    DisplayState.ON: INDICATOR_ON,
    DisplayState.TRANSITIONING: INDICATOR_MID,
}

_STATE_TEXT = {
    DisplayState.OFF: "off",
    DisplayState.ON: "on",
    DisplayState.TRANSITIONING: "turning on/off...",
}


@dataclass(frozen=True)
class CapabilityView:
    key: str
    label: str
    state: DisplayState
    icon: str
    indicator: str
    description: str


@dataclass(frozen=True)
class RenderSnapshot:
    capabilities: tuple[CapabilityView, ...]
    brightness: BrightnessDisplay

    def capability(self, key: str) -> CapabilityView | None:
        for view in self.capabilities:
            if view.key == key:
                return view
        return None


class RenderSurface(Protocol):
    def show(self, snapshot: RenderSnapshot) -> None: ...


def capability_view(tracker: Any) -> CapabilityView:
    state = tracker.get_display_state()
    return CapabilityView(
        key=tracker.key,
        label=tracker.label,
        state=state,
        icon=f"{tracker.key}_{state.value}",
        indicator=_INDICATORS[state],
        description=f"{tracker.label}: {_STATE_TEXT[state]}",
    )


def build_snapshot(trackers, brightness: Any) -> RenderSnapshot:
    """Compute every view independently from current reads."""

    return RenderSnapshot(
        capabilities=tuple(capability_view(t) for t in trackers),
        brightness=brightness.display(),
    )
