from __future__ import annotations

from types import SimpleNamespace

from datacontrol.core.brightness import BrightnessDisplay
from datacontrol.core.capabilities import DisplayState
from datacontrol.tray.render import CapabilityView, RenderSnapshot, build_snapshot
from datacontrol.tray.ui import icon as icon_mod
from datacontrol.tray.ui import menu as menu_mod
from datacontrol.tray.ui.surface import PystraySurface


class FakeItem:
    def __init__(self, text, action, checked=None, **_kw):
        self.text = text
        self.action = action
        self.checked = checked


class FakeMenu:
    SEPARATOR = object()

    def __init__(self, *items):
        self.items = items


FAKE_PYSTRAY = SimpleNamespace(Menu=FakeMenu)


def _snapshot(wifi: DisplayState = DisplayState.ON) -> RenderSnapshot:
    indicators = {DisplayState.ON: "on", DisplayState.OFF: "off", DisplayState.TRANSITIONING: "mid"}
    views = tuple(
        CapabilityView(
            key=key,
            label=label,
            state=state,
            icon=f"{key}_{state.value}",
            indicator=indicators[state],
            description=f"{label}: {state.value}",
        )
        for key, label, state in (
            ("wifi", "Wi-Fi", wifi),
            ("mobile_data", "Mobile data", DisplayState.OFF),
            ("bluetooth", "Bluetooth", DisplayState.TRANSITIONING),
        )
    )
    return RenderSnapshot(
        capabilities=views,
        brightness=BrightnessDisplay(icon="half", indicator_on=True, description="Brightness: half"),
    )


def test_build_snapshot_maps_display_states() -> None:
    trackers = [
        SimpleNamespace(key="wifi", label="Wi-Fi", get_display_state=lambda: DisplayState.TRANSITIONING),
        SimpleNamespace(key="bluetooth", label="Bluetooth", get_display_state=lambda: DisplayState.OFF),
    ]
    brightness = SimpleNamespace(display=lambda: BrightnessDisplay("auto", True, "Brightness: auto"))

    snap = build_snapshot(trackers, brightness)

    wifi = snap.capability("wifi")
    assert (wifi.icon, wifi.indicator) == ("wifi_transitioning", "mid")
    assert snap.capability("bluetooth").indicator == "off"
    assert snap.capability("nfc") is None
    assert snap.brightness.icon == "auto"


def test_icon_is_64px_rgba_and_changes_with_state() -> None:
    on = icon_mod.create_icon(_snapshot(DisplayState.ON))
    off = icon_mod.create_icon(_snapshot(DisplayState.OFF))

    assert on.size == (64, 64)
    assert on.mode == "RGBA"
    assert on.tobytes() != off.tobytes()


def test_menu_items_dispatch_action_ids() -> None:
    dispatched: list[str] = []
    items = menu_mod.build_menu_items(
        _snapshot(),
        dispatch=dispatched.append,
        on_quit=lambda _icon, _item: None,
        pystray=FAKE_PYSTRAY,
        item=FakeItem,
    )

    clickable = [i for i in items if isinstance(i, FakeItem)]
    assert [i.text for i in clickable[:4]] == ["Wi-Fi: on", "Mobile data: off", "Bluetooth: transitioning", "Brightness: half"]
    assert [i.checked(None) for i in clickable[:4]] == [True, False, False, True]

    for i in clickable[:-1]:
        i.action(None, i)
    assert dispatched == ["wifi", "mobile_data", "bluetooth", "brightness", "sleep", "settings", "tether_settings"]


def test_surface_updates_icon_title_and_menu() -> None:
    icon = SimpleNamespace(icon=None, title="", menu=None, updates=0)
    icon.update_menu = lambda: setattr(icon, "updates", icon.updates + 1)
    surface = PystraySurface(
        icon,
        dispatch=lambda _a: True,
        on_quit=lambda _icon, _item: None,
        pystray=FAKE_PYSTRAY,
        item=FakeItem,
    )

    snap = _snapshot()
    surface.show(snap)

    assert surface.last_snapshot is snap
    assert icon.icon.size == (64, 64)
    assert icon.title.startswith("DataControl: Wi-Fi: on")
    assert isinstance(icon.menu, FakeMenu)
    assert icon.updates == 1
