from __future__ import annotations

import os
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest


def _hardware_opted_in() -> bool:
    return os.environ.get("DATACONTROL_ALLOW_HARDWARE") == "1"


# Safety default: during pytest, avoid touching the user's real config and
# settings store. This also keeps a running DataControl tray from reacting to
# test writes.
if not _hardware_opted_in():
    os.environ.setdefault(
        "DATACONTROL_CONFIG_DIR",
        tempfile.mkdtemp(prefix="datacontrol-test-config-"),
    )


class ImmediateThread:
    """Stand-in for threading.Thread that runs the target on start()."""

    created: list["ImmediateThread"] = []

    def __init__(self, *, target, args=(), kwargs=None, daemon=None):
        self.target = target
        self.args = args
        self.kwargs = kwargs or {}
        self.daemon = daemon
        type(self).created.append(self)

    def start(self) -> None:
        self.target(*self.args, **self.kwargs)

    def join(self, timeout=None) -> None:
        return None


class DeferredThread(ImmediateThread):
    """Records start() but only runs the target when run_pending() is called."""

    pending: list["DeferredThread"] = []

    def start(self) -> None:
        DeferredThread.pending.append(self)

    @classmethod
    def run_pending(cls) -> None:
        pending, cls.pending = cls.pending, []
        for t in pending:
            t.target(*t.args, **t.kwargs)


@pytest.fixture
def immediate_threads():
    ImmediateThread.created = []
    return ImmediateThread


@pytest.fixture
def deferred_threads():
    DeferredThread.created = []
    DeferredThread.pending = []
    return DeferredThread


@pytest.fixture
def no_sleep(monkeypatch):
    """Replace time.sleep in the reconciliation loop and record the delays."""

    import importlib

    reconcile_mod = importlib.import_module("datacontrol.core.capabilities.reconcile")

    sleeps: list[float] = []
    monkeypatch.setattr(reconcile_mod.time, "sleep", lambda s: sleeps.append(float(s)))
    return sleeps


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


class RecordingSurface:
    def __init__(self):
        self.snapshots = []

    def show(self, snapshot) -> None:
        self.snapshots.append(snapshot)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


class FakeConnectivity:
    def __init__(self):
        self.registered = []
        self.unregistered = []

    def register_callback(self, transports, callback) -> None:
        self.registered.append((tuple(transports), callback))

    def unregister(self, callback) -> None:
        self.unregistered.append(callback)


@pytest.fixture
def connectivity() -> FakeConnectivity:
    return FakeConnectivity()


@pytest.fixture
def tray_config() -> SimpleNamespace:
    return SimpleNamespace(
        poll_attempts=15,
        poll_interval_s=1.0,
        hotspot_connection="Hotspot",
        auto_brightness_available=True,
        min_brightness=1,
        default_brightness_percent=40,
        backlight_device="",
        settings_poll_interval_s=0.5,
        notifications_enabled=True,
        sleep_command=["systemctl", "suspend"],
        settings_command=["nm-connection-editor"],
        tether_settings_command=["nm-connection-editor", "--show"],
    )
