"""The control context: one owner for everything a tray instance drives.

A context is created once per process but its trackers, brightness
controller and change observer only exist between `on_enable()` and
`on_disable()`. Re-enabling builds fresh ones.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Optional

from datacontrol.core.brightness import BrightnessController, find_backlight, read_brightness_limits
from datacontrol.core.capabilities import CapabilityTracker, build_capability_specs
from datacontrol.core.config import Config
from datacontrol.core.monitoring.connectivity import ConnectivityMonitor
from datacontrol.core.settings import JsonSettingsStore

from . import dispatch as dispatch_mod
from .launch import launch_command
from .notify import Notifier
from .observer import ChangeObserver
from .render import RenderSnapshot, RenderSurface, build_snapshot

logger = logging.getLogger(__name__)


class ControlContext:
    def __init__(
        self,
        config: Any = None,
        *,
        store: Any = None,
        connectivity: Any = None,
        notifier: Any = None,
        specs: Optional[list] = None,
        backlight: Any = None,
        launcher=launch_command,
    ):
        self.config = config if config is not None else Config()
        self.store = store
        self.connectivity = connectivity if connectivity is not None else ConnectivityMonitor()
        self.notifier = notifier if notifier is not None else Notifier(
            enabled=bool(getattr(self.config, "notifications_enabled", True))
        )
        self._specs = specs
        self._backlight = backlight
        self._launch = launcher

        self.trackers: list[CapabilityTracker] = []
        self.brightness: Optional[BrightnessController] = None
        self.observer: Optional[ChangeObserver] = None
        self.surface: Optional[RenderSurface] = None

        self._state_lock = threading.Lock()
        self._render_lock = threading.Lock()
        self._event_last_at: dict[str, float] = {}

    # ---- lifecycle

    @property
    def enabled(self) -> bool:
        return self.observer is not None

    def on_enable(self) -> None:
        with self._state_lock:
            if self.observer is not None:
                return

            if self.store is None:
                self.store = JsonSettingsStore(
                    poll_interval_s=float(getattr(self.config, "settings_poll_interval_s", 0.5))
                )

            specs = self._specs if self._specs is not None else build_capability_specs(self.config)
            self.trackers = [
                CapabilityTracker(
                    spec,
                    notify=self.notifier.show,
                    on_settled=self._on_tracker_settled,
                    max_attempts=int(getattr(self.config, "poll_attempts", 15)),
                    poll_interval_s=float(getattr(self.config, "poll_interval_s", 1.0)),
                )
                for spec in specs
            ]

            backlight = self._backlight
            if backlight is None:
                backlight = find_backlight(str(getattr(self.config, "backlight_device", "") or ""))
            self.brightness = BrightnessController(
                self.store,
                limits=read_brightness_limits(self.config, backlight),
                auto_available=bool(getattr(self.config, "auto_brightness_available", True)),
                preview=backlight.write_brightness if backlight is not None else None,
            )

            self.observer = ChangeObserver(self.store, self.connectivity, self._on_external_change)
            observer = self.observer

        observer.install()
        self.log_event("context", "enable", capabilities=len(self.trackers))
        self.request_render(reason="enable")

    def on_disable(self) -> None:
        with self._state_lock:
            observer, self.observer = self.observer, None
            self.trackers = []
            self.brightness = None

        if observer is None:
            return
        observer.uninstall()
        self.log_event("context", "disable")

    # ---- rendering

    def attach_surface(self, surface: Optional[RenderSurface]) -> None:
        self.surface = surface

    def snapshot(self) -> Optional[RenderSnapshot]:
        with self._state_lock:
            trackers = list(self.trackers)
            brightness = self.brightness
        if brightness is None:
            return None
        return build_snapshot(trackers, brightness)

    def render_into(self, surface: RenderSurface) -> Optional[RenderSnapshot]:
        """Recompute every view from live reads and push it to *surface*."""

        with self._render_lock:
            snap = self.snapshot()
            if snap is None:
                return None
            surface.show(snap)
            return snap

    def request_render(self, *, reason: str = "") -> None:
        surface = self.surface
        if surface is None:
            return
        logger.debug("Render (%s)", reason or "request")
        try:
            self.render_into(surface)
        except Exception as exc:
            logger.exception("Render failed: %s", exc)

    def _on_tracker_settled(self) -> None:
        self.request_render(reason="settled")

    def _on_external_change(self, reason: str) -> None:
        self.log_event("observer", "change", reason=reason)
        self.request_render(reason=reason)

    # ---- actions

    def tracker(self, key: str) -> Optional[CapabilityTracker]:
        with self._state_lock:
            for t in self.trackers:
                if t.key == key:
                    return t
        return None

    def dispatch(self, action_id: Any) -> bool:
        return dispatch_mod.dispatch(self, action_id)

    def toggle_brightness(self) -> None:
        brightness = self.brightness
        if brightness is None:
            return
        brightness.toggle()

    def go_to_sleep(self) -> None:
        self._launch(getattr(self.config, "sleep_command", ["systemctl", "suspend"]))

    def launch(self, name: str) -> None:
        argv = getattr(self.config, f"{name}_command", None)
        if not argv:
            logger.warning("No command configured for %s", name)
            return
        self._launch(argv)

    # ---- logging helpers

    def log_event(self, source: str, action: str, **fields) -> None:
        """Log a human-readable event cause.

        Identical messages within one second are dropped so watch bursts do
        not flood the log.
        """

        parts = [f"{k}={fields[k]}" for k in sorted(fields)]
        msg = f"EVENT {source}:{action}"
        if parts:
            msg = f"{msg} " + " ".join(parts)

        now = time.monotonic()
        last = self._event_last_at.get(msg)
        if last is not None and now - last < 1.0:
            return
        self._event_last_at[msg] = now
        logger.info("%s", msg)
