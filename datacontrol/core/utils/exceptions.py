from __future__ import annotations


def is_device_busy(exc: Exception) -> bool:
    """Best-effort check for transient 'busy' errors."""

    errno = getattr(exc, "errno", None)
    if errno == 16:
        return True

    try:
        msg = str(exc)
    except Exception:
        return False

    return "Device or resource busy" in msg


def is_permission_denied(exc: Exception) -> bool:
    """Best-effort check for permission/authorization failures.

    Backlight writes and radio commands surface these as PermissionError,
    OSError with errno, or a descriptive message from a helper tool.
    """

    if isinstance(exc, PermissionError):
        return True

    errno = getattr(exc, "errno", None)
    if errno in (1, 13):
        # EPERM=1, EACCES=13
        return True

    try:
        msg = str(exc).lower()
    except Exception:
        return False

    return "permission denied" in msg or "access denied" in msg or "not authorized" in msg
