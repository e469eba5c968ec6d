from __future__ import annotations

import importlib
import logging
import os
from contextlib import suppress

from datacontrol.core.config.paths import config_dir


_pystray_mod = None
_pystray_item = None
_instance_lock_fh = None


logger = logging.getLogger(__name__)


def get_pystray():
    """Import pystray only when the tray UI is actually needed.

    Importing `pystray` on Linux may connect to a display immediately, which
    breaks headless environments that still import the tray modules. The
    backend is left to pystray unless `PYSTRAY_BACKEND` is set.
    """

    global _pystray_mod, _pystray_item

    if _pystray_mod is not None and _pystray_item is not None:
        return _pystray_mod, _pystray_item

    backend = os.environ.get("PYSTRAY_BACKEND")
    if backend:
        logger.info("pystray backend: %s (explicit)", backend)

    try:
        module = importlib.import_module("pystray")
    except Exception as exc:
        raise RuntimeError(
            "pystray could not be initialized. DataControl needs a desktop "
            "session (X11/Wayland) to show its tray icon."
        ) from exc

    _pystray_mod = module
    _pystray_item = getattr(module, "MenuItem")
    return _pystray_mod, _pystray_item


def acquire_single_instance_lock() -> bool:
    """Ensure only one DataControl tray drives the radios at a time."""

    global _instance_lock_fh

    try:
        import fcntl
    except ImportError:
        return True

    lock_dir = config_dir()
    with suppress(OSError):
        lock_dir.mkdir(parents=True, exist_ok=True)
    lock_path = lock_dir / "datacontrol.lock"

    try:
        _instance_lock_fh = open(lock_path, "a+")
        fcntl.flock(_instance_lock_fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        _instance_lock_fh.seek(0)
        _instance_lock_fh.truncate()
        _instance_lock_fh.write(f"pid={os.getpid()}\n")
        _instance_lock_fh.flush()
        return True
    except OSError:
        return False
