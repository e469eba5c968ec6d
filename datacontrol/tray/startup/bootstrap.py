from __future__ import annotations

import logging
import os
import sys

from ..integrations import runtime


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging for the tray app.

    If callers already configured logging handlers, we don't override them.
    """

    if logging.getLogger().handlers:
        return

    level = logging.DEBUG if os.environ.get("DATACONTROL_DEBUG") else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def acquire_single_instance_or_exit() -> None:
    """Acquire the tray single-instance lock or exit with code 0."""

    if runtime.acquire_single_instance_lock():
        return

    logger.error("DataControl is already running (lock held). Not starting a second instance.")
    sys.exit(0)
