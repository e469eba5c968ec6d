"""Integer key/value settings store.

The store is shared with other writers (a settings GUI, a session script, a
second DataControl process), so it never assumes exclusive ownership. Reads
always go to the file. Watches are served by a polling thread that compares
the file's (mtime, inode, size) and then the values of watched keys against
the last seen snapshot, so writes from this process and from elsewhere are
reported the same way. Atomic replaces always change the inode, which keeps
back-to-back writes visible on filesystems with coarse timestamps.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from ..config.file_storage import load_json_settings, save_json_settings_atomic
from ..config.paths import settings_file_path
from ..logging_utils import log_throttled

logger = logging.getLogger(__name__)

SettingCallback = Callable[[str], None]


class SettingNotFoundError(KeyError):
    """Raised when a key is missing or does not hold an integer."""


class SettingsStore(Protocol):
    def get_int(self, key: str) -> int: ...

    def put_int(self, key: str, value: int) -> bool: ...

    def watch(self, key: str, callback: SettingCallback) -> None: ...

    def unwatch(self, callback: SettingCallback) -> None: ...


def _coerce_int(value) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class JsonSettingsStore:
    """Settings store backed by a JSON object of integers."""

    def __init__(self, path: Path | None = None, *, poll_interval_s: float = 0.5):
        self.path = Path(path) if path is not None else settings_file_path()
        self.poll_interval_s = float(poll_interval_s)

        self._lock = threading.Lock()
        self._watches: list[tuple[str, SettingCallback]] = []

        # Snapshot the poller diffs against.
        self._seen_sig = self._stat_signature()
        self._seen = self._load() or {}

        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    # ---- storage

    def _stat_signature(self) -> tuple[int, int, int] | None:
        try:
            st = self.path.stat()
            return (st.st_mtime_ns, st.st_ino, st.st_size)
        except OSError:
            return None

    def _load(self) -> dict | None:
        return load_json_settings(path=self.path, defaults={}, logger=logger)

    def get_int(self, key: str) -> int:
        values = self._load()
        if values is None:
            with self._lock:
                values = dict(self._seen)
        value = _coerce_int(values.get(key))
        if value is None:
            raise SettingNotFoundError(key)
        return value

    def put_int(self, key: str, value: int) -> bool:
        """Persist *value* under *key*; returns False if the write failed.

        Re-reads the file first so other writers' keys survive. Watchers are
        notified by the poller, not synchronously.
        """

        with self._lock:
            current = self._load()
            if current is None:
                current = dict(self._seen)
            current[str(key)] = int(value)
            return save_json_settings_atomic(path=self.path, settings=current, logger=logger)

    # ---- watches

    def watch(self, key: str, callback: SettingCallback) -> None:
        with self._lock:
            self._watches.append((str(key), callback))
        self._ensure_polling()

    def unwatch(self, callback: SettingCallback) -> None:
        with self._lock:
            self._watches = [(k, cb) for (k, cb) in self._watches if cb is not callback]
            remaining = len(self._watches)
        if remaining == 0:
            self.stop()

    def watched_keys(self) -> set[str]:
        with self._lock:
            return {k for (k, _cb) in self._watches}

    def poll_once(self) -> list[str]:
        """Check the file for changes and fire callbacks for changed keys.

        Returns the changed watched keys in watch order.
        """

        sig = self._stat_signature()
        with self._lock:
            if sig == self._seen_sig:
                return []
            loaded = self._load()
            if loaded is None:
                return []
            old = self._seen
            self._seen = loaded
            self._seen_sig = sig
            watches = list(self._watches)

        changed: list[str] = []
        for key, callback in watches:
            if old.get(key) == loaded.get(key):
                continue
            if key not in changed:
                changed.append(key)
            try:
                callback(key)
            except Exception as exc:
                logger.exception("Settings watch callback failed for %s: %s", key, exc)
        return changed

    def _ensure_polling(self) -> None:
        if self._stop_event is not None and not self._stop_event.is_set():
            return

        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(target=self._poll_loop, args=(stop_event,), daemon=True)
        self._thread.start()

    def _poll_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self.poll_once()
            except Exception as exc:
                log_throttled(
                    logger,
                    "settings_store.poll",
                    interval_s=30,
                    level=logging.WARNING,
                    msg=f"Settings polling error: {exc}",
                    exc=exc,
                )
            stop_event.wait(self.poll_interval_s)

    def stop(self) -> None:
        """Stop the polling thread. Registered watches are kept."""

        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2)
