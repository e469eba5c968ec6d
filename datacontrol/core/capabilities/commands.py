from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 5.0


def tool_available(name: str) -> bool:
    return shutil.which(name) is not None


def run_command(argv: list[str], *, timeout_s: float = DEFAULT_TIMEOUT_S) -> Optional[str]:
    """Run a command and return stdout on success.

    Returns None when the tool is missing, times out or exits non-zero.
    """

    try:
        cp = subprocess.run(argv, check=False, capture_output=True, text=True, timeout=timeout_s)
    except FileNotFoundError:
        logger.debug("Command not found: %s", argv[0])
        return None
    except subprocess.TimeoutExpired:
        logger.debug("Command timed out: %s", " ".join(argv))
        return None

    if cp.returncode != 0:
        logger.debug("Command failed (%s): %s: %s", cp.returncode, " ".join(argv), (cp.stderr or "").strip())
        return None

    return cp.stdout.strip()


def run_checked(argv: list[str], *, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
    """Run a state-changing command; raise RuntimeError on failure."""

    try:
        cp = subprocess.run(argv, check=False, capture_output=True, text=True, timeout=timeout_s)
    except FileNotFoundError as exc:
        raise RuntimeError(f"{argv[0]} is not installed") from exc
    except subprocess.TimeoutExpired as exc:
        raise RuntimeError(f"{' '.join(argv)} timed out") from exc

    if cp.returncode != 0:
        detail = (cp.stderr or cp.stdout or "").strip()
        raise RuntimeError(f"{' '.join(argv)} exited {cp.returncode}: {detail}")
