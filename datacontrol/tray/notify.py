"""User notifications for the tray."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "DataControl"


class Notifier:
    """Best-effort `show(message)` channel.

    Tries tray notifications first (pystray), then falls back to notify-send.
    Messages shown before an icon is attached are queued and flushed by
    `attach()`. Once detached on quit, messages are only logged.
    """

    def __init__(self, *, title: str = DEFAULT_TITLE, enabled: bool = True):
        self.title = str(title)
        self.enabled = bool(enabled)
        self.icon: Any = None
        self._pending: list[str] = []
        self._detached = False

    def attach(self, icon: Any) -> None:
        self.icon = icon
        self._detached = False
        pending, self._pending = self._pending, []
        for message in pending:
            self.show(message)

    def detach(self) -> None:
        self.icon = None
        self._detached = True
        self._pending = []

    def show(self, message: str) -> None:
        message = str(message)
        logger.info("Notification: %s", message)
        if not self.enabled or self._detached:
            return

        icon = self.icon
        if icon is None:
            self._pending.append(message)
            return

        notify_fn = getattr(icon, "notify", None)
        if callable(notify_fn):
            try:
                notify_fn(message, self.title)
                return
            except TypeError:
                try:
                    notify_fn(message)
                    return
                except Exception as exc:
                    logger.debug("Tray notification failed: %s", exc)
            except Exception as exc:
                logger.debug("Tray notification failed: %s", exc)

        # Fallback for environments where pystray notifications are unavailable.
        if not shutil.which("notify-send"):
            return
        try:
            subprocess.run(
                ["notify-send", self.title, message],
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.debug("notify-send failed: %s", exc)
