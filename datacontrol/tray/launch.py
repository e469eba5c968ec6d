"""Fire-and-forget external commands (sleep, settings shortcuts)."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

logger = logging.getLogger(__name__)


def launch_command(argv: Sequence[str]) -> bool:
    """Start *argv* detached from the tray; returns False if it could not start."""

    cmd = [str(a) for a in (argv or []) if str(a)]
    if not cmd:
        logger.warning("No command configured")
        return False

    try:
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning("Failed to launch %s: %s", cmd[0], exc)
        return False

    logger.debug("Launched %s", " ".join(cmd))
    return True
