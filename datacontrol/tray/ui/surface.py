"""pystray-backed render surface."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional

from ..render import RenderSnapshot
from . import icon as icon_mod
from . import menu as menu_mod

logger = logging.getLogger(__name__)


class PystraySurface:
    def __init__(
        self,
        icon: Any,
        *,
        dispatch: Callable[[str], Any],
        on_quit: Callable[[Any, Any], None],
        pystray: Any,
        item: Any,
    ):
        self.icon = icon
        self._dispatch = dispatch
        self._on_quit = on_quit
        self._pystray = pystray
        self._item = item
        self.last_snapshot: Optional[RenderSnapshot] = None

    def build_menu(self, snapshot: RenderSnapshot) -> Any:
        return menu_mod.build_menu(
            snapshot,
            dispatch=self._dispatch,
            on_quit=self._on_quit,
            pystray=self._pystray,
            item=self._item,
        )

    def show(self, snapshot: RenderSnapshot) -> None:
        self.last_snapshot = snapshot

        self.icon.icon = icon_mod.create_icon(snapshot)
        self.icon.title = "DataControl: " + ", ".join(v.description for v in snapshot.capabilities)
        self.icon.menu = self.build_menu(snapshot)

        update_menu = getattr(self.icon, "update_menu", None)
        if callable(update_menu):
            try:
                update_menu()
            except Exception as exc:
                logger.debug("Tray menu update failed: %s", exc)
