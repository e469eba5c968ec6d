"""Tray startup entrypoint.

This module owns the startup sequence (logging, single-instance) and then
launches the `DataControlTray` application.
"""

from __future__ import annotations

import logging
import sys

from .application import DataControlTray
from .startup import acquire_single_instance_or_exit, configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        configure_logging()
        acquire_single_instance_or_exit()

        app = DataControlTray()
        app.run()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
        sys.exit(0)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        sys.exit(1)
