"""Network available/lost notifications from `nmcli monitor`.

One monitor process serves every registered callback. It is started with the
first registration and terminated when the last callback is removed.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from ..capabilities import nmcli
from ..logging_utils import log_throttled

logger = logging.getLogger(__name__)

TRANSPORT_WIFI = "wifi"
TRANSPORT_CELLULAR = "gsm"
TRANSPORT_CDMA = "cdma"
TRANSPORT_BLUETOOTH = "bt"

AVAILABLE = "available"
LOST = "lost"

_LOST_STATES = {"disconnected", "unavailable", "unmanaged"}


@dataclass(frozen=True)
class NetworkCallback:
    on_available: Callable[[str], None]
    on_lost: Callable[[str], None]


def parse_monitor_line(line: Optional[str]) -> Optional[tuple[str, str]]:
    """Parse a device line from `nmcli monitor`.

    `wlp2s0: connected` -> ("wlp2s0", "available"),
    `wlp2s0: disconnected` -> ("wlp2s0", "lost"). Other lines give None.
    """

    if not line:
        return None
    s = line.strip()
    if ": " not in s:
        return None
    device, _, status = s.partition(": ")
    device = device.strip()
    status = status.strip().lower()
    if not device or " " in device:
        return None
    if status == "connected":
        return device, AVAILABLE
    if status in _LOST_STATES:
        return device, LOST
    return None


class ConnectivityMonitor:
    def __init__(self, *, device_types: Callable[[], dict[str, str]] = nmcli.device_types):
        self._device_types = device_types
        self._known_types: dict[str, str] = {}

        self._lock = threading.Lock()
        self._callbacks: list[tuple[frozenset[str], NetworkCallback]] = []

        self._process: Optional[subprocess.Popen] = None
        self._thread: Optional[threading.Thread] = None
        self.monitoring = False

    def register_callback(self, transports: Iterable[str], callback: NetworkCallback) -> None:
        with self._lock:
            self._callbacks.append((frozenset(str(t).lower() for t in transports), callback))
        self._start()

    def unregister(self, callback: NetworkCallback) -> None:
        with self._lock:
            self._callbacks = [(t, cb) for (t, cb) in self._callbacks if cb is not callback]
            remaining = len(self._callbacks)
        if remaining == 0:
            self._stop()

    # ---- event handling

    def _transport_for(self, device: str) -> Optional[str]:
        try:
            self._known_types.update(self._device_types())
        except Exception as exc:
            logger.debug("Device type lookup failed: %s", exc)
        return self._known_types.get(device)

    def handle_line(self, line: str) -> int:
        """Dispatch one monitor line; returns how many callbacks fired."""

        parsed = parse_monitor_line(line)
        if parsed is None:
            return 0
        device, edge = parsed

        transport = self._transport_for(device)
        with self._lock:
            matching = [cb for (transports, cb) in self._callbacks if transport in transports]
        if not matching:
            return 0

        logger.debug("Connection %s on %s (%s)", edge, device, transport)
        fired = 0
        for cb in matching:
            handler = cb.on_available if edge == AVAILABLE else cb.on_lost
            try:
                handler(device)
                fired += 1
            except Exception as exc:
                logger.exception("Connectivity callback failed: %s", exc)
        return fired

    # ---- process lifecycle

    def _start(self) -> None:
        if self.monitoring:
            return

        try:
            process = subprocess.Popen(
                ["nmcli", "monitor"],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                universal_newlines=True,
                bufsize=1,
            )
        except FileNotFoundError:
            logger.warning("nmcli not available, network changes will not refresh the tray")
            return

        self._process = process
        self.monitoring = True
        self._thread = threading.Thread(target=self._read_loop, args=(process,), daemon=True)
        self._thread.start()
        logger.info("Connectivity monitoring started")

    def _read_loop(self, process: subprocess.Popen) -> None:
        # For type-checkers: stdout is only None if stdout=DEVNULL/None.
        assert process.stdout is not None

        while self.monitoring:
            line = process.stdout.readline()
            if not line:
                break
            try:
                self.handle_line(line)
            except Exception as exc:
                log_throttled(
                    logger,
                    "connectivity.read_loop",
                    interval_s=30,
                    level=logging.WARNING,
                    msg=f"Connectivity monitoring error: {exc}",
                    exc=exc,
                )

    def _stop(self) -> None:
        self.monitoring = False
        process, self._process = self._process, None
        thread, self._thread = self._thread, None

        if process is not None:
            try:
                process.terminate()
                process.wait(timeout=2)
            except (OSError, subprocess.TimeoutExpired) as exc:
                logger.debug("nmcli monitor did not exit cleanly: %s", exc)
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2)
