"""Tray application class."""

from __future__ import annotations

import logging
from typing import Any, Optional

from datacontrol.core.config import Config

from .context import ControlContext
from .integrations import runtime
from .ui.surface import PystraySurface

logger = logging.getLogger(__name__)


class DataControlTray:
    """System tray application for DataControl."""

    def __init__(self, context: Optional[ControlContext] = None):
        self.config = context.config if context is not None else Config()
        self.context = context if context is not None else ControlContext(self.config)
        self.icon: Any = None
        self.surface: Optional[PystraySurface] = None

    # ---- menu callbacks

    def _on_quit_clicked(self, icon, _item):
        self.quit(icon)

    def quit(self, icon: Any = None) -> None:
        self.context.attach_surface(None)
        self.context.notifier.detach()
        self.context.on_disable()
        icon = icon if icon is not None else self.icon
        if icon is not None:
            icon.stop()

    # ---- run

    def _on_ready(self, icon: Any) -> None:
        icon.visible = True
        # Flush notifications queued during startup.
        self.context.notifier.attach(icon)

    def run(self) -> None:
        pystray, item = runtime.get_pystray()

        logger.info("Creating tray icon...")
        self.icon = pystray.Icon("datacontrol", title="DataControl")
        self.surface = PystraySurface(
            self.icon,
            dispatch=self.context.dispatch,
            on_quit=self._on_quit_clicked,
            pystray=pystray,
            item=item,
        )
        self.context.attach_surface(self.surface)
        self.context.on_enable()

        logger.info("DataControl tray app started")
        self.icon.run(setup=self._on_ready)
