"""Re-render triggers for changes made outside the tray.

Brightness can be moved by another settings writer, and radios can come and
go underneath us (airplane mode, rfkill, a cable). The observer turns both
kinds of event into a plain "something changed" callback; the context then
re-renders from live reads.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from datacontrol.core.monitoring.connectivity import (
    TRANSPORT_BLUETOOTH,
    TRANSPORT_CDMA,
    TRANSPORT_CELLULAR,
    TRANSPORT_WIFI,
    NetworkCallback,
)
from datacontrol.core.settings.keys import BRIGHTNESS_KEYS

logger = logging.getLogger(__name__)

OBSERVED_TRANSPORTS = (TRANSPORT_WIFI, TRANSPORT_CELLULAR, TRANSPORT_CDMA, TRANSPORT_BLUETOOTH)


class ChangeObserver:
    def __init__(self, store: Any, connectivity: Any, on_change: Callable[[str], None]):
        self.store = store
        self.connectivity = connectivity
        self._on_change = on_change

        self._lock = threading.Lock()
        self._installed = False
        self._network_callback = NetworkCallback(
            on_available=self._on_network_available,
            on_lost=self._on_network_lost,
        )

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        with self._lock:
            if self._installed:
                return
            self._installed = True

        for key in BRIGHTNESS_KEYS:
            self.store.watch(key, self._on_setting_changed)
        try:
            self.connectivity.register_callback(OBSERVED_TRANSPORTS, self._network_callback)
        except Exception as exc:
            logger.warning("Connectivity callbacks unavailable: %s", exc)
        logger.debug("Change observer installed")

    def uninstall(self) -> None:
        with self._lock:
            if not self._installed:
                return
            self._installed = False

        self.store.unwatch(self._on_setting_changed)
        try:
            self.connectivity.unregister(self._network_callback)
        except Exception as exc:
            logger.debug("Connectivity unregister failed: %s", exc)
        logger.debug("Change observer uninstalled")

    # ---- event sources

    def _fire(self, reason: str) -> None:
        try:
            self._on_change(reason)
        except Exception as exc:
            logger.exception("Re-render after %s failed: %s", reason, exc)

    def _on_setting_changed(self, key: str) -> None:
        self._fire(f"setting:{key}")

    def _on_network_available(self, device: str) -> None:
        self._fire(f"network_available:{device}")

    def _on_network_lost(self, device: str) -> None:
        self._fire(f"network_lost:{device}")
