from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..dispatch import Action
from ..render import INDICATOR_ON, RenderSnapshot


def _dispatch_cb(dispatch: Callable[[str], Any], action_id: str):
    def _action(_icon, _item):
        dispatch(action_id)

    return _action


def build_menu_items(
    snapshot: RenderSnapshot,
    *,
    dispatch: Callable[[str], Any],
    on_quit: Callable[[Any, Any], None],
    pystray: Any,
    item: Any,
) -> list[Any]:
    """Menu items for one snapshot. Checked states are frozen at build time."""

    items: list[Any] = []
    for view in snapshot.capabilities:
        items.append(
            item(
                view.description,
                _dispatch_cb(dispatch, view.key),
                checked=lambda _i, on=(view.indicator == INDICATOR_ON): on,
            )
        )

    brightness = snapshot.brightness
    items.append(
        item(
            brightness.description,
            _dispatch_cb(dispatch, Action.BRIGHTNESS.value),
            checked=lambda _i, on=brightness.indicator_on: on,
        )
    )

    items.extend(
        [
            pystray.Menu.SEPARATOR,
            item("Sleep", _dispatch_cb(dispatch, Action.SLEEP.value)),
            item("Network settings...", _dispatch_cb(dispatch, Action.SETTINGS.value)),
            item("Tethering settings...", _dispatch_cb(dispatch, Action.TETHER_SETTINGS.value)),
            pystray.Menu.SEPARATOR,
            item("Quit", on_quit),
        ]
    )
    return items


def build_menu(snapshot: RenderSnapshot, **kwargs: Any) -> Any:
    pystray = kwargs["pystray"]
    return pystray.Menu(*build_menu_items(snapshot, **kwargs))
