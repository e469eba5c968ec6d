from __future__ import annotations

import errno
from pathlib import Path
from types import SimpleNamespace

import datacontrol.core.brightness.backlight as backlight_mod
from datacontrol.core.brightness import BacklightDevice, find_backlight, read_brightness_limits


def _make_device(root: Path, name: str, *, max_brightness: int, brightness: int = 0) -> Path:
    d = root / name
    d.mkdir(parents=True)
    (d / "max_brightness").write_text(f"{max_brightness}\n", encoding="utf-8")
    (d / "brightness").write_text(f"{brightness}\n", encoding="utf-8")
    return d


def test_backlight_root_is_fenced_under_pytest(monkeypatch) -> None:
    monkeypatch.delenv("DATACONTROL_SYSFS_BACKLIGHT_ROOT", raising=False)
    monkeypatch.delenv("DATACONTROL_ALLOW_HARDWARE", raising=False)
    assert not backlight_mod.backlight_root().exists()
    assert find_backlight() is None


def test_find_backlight_prefers_largest_range(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("DATACONTROL_SYSFS_BACKLIGHT_ROOT", str(tmp_path))
    _make_device(tmp_path, "acpi_video0", max_brightness=10)
    _make_device(tmp_path, "intel_backlight", max_brightness=19200)

    dev = find_backlight()
    assert dev is not None
    assert dev.name == "intel_backlight"
    assert dev.max_brightness() == 19200


def test_find_backlight_honours_preferred_device(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("DATACONTROL_SYSFS_BACKLIGHT_ROOT", str(tmp_path))
    _make_device(tmp_path, "acpi_video0", max_brightness=10)
    _make_device(tmp_path, "intel_backlight", max_brightness=19200)

    assert find_backlight("acpi_video0").name == "acpi_video0"
    assert find_backlight("missing").name == "intel_backlight"


def test_write_brightness_writes_sysfs(tmp_path) -> None:
    dev = BacklightDevice(_make_device(tmp_path, "panel", max_brightness=255, brightness=3))
    assert dev.write_brightness(128) is True
    assert dev.brightness() == 128


def test_write_brightness_falls_back_to_brightnessctl_without_permission(tmp_path, monkeypatch) -> None:
    dev = BacklightDevice(_make_device(tmp_path, "panel", max_brightness=255))
    calls: list[list[str]] = []

    def _denied(self, *_a, **_kw):
        raise PermissionError(errno.EACCES, "Permission denied")

    monkeypatch.setattr(Path, "write_text", _denied)
    monkeypatch.setattr(backlight_mod, "tool_available", lambda name: name == "brightnessctl")
    monkeypatch.setattr(backlight_mod, "run_command", lambda argv, **_kw: calls.append(argv) or "")

    assert dev.write_brightness(42) is True
    assert calls == [["brightnessctl", "-q", "-d", "panel", "set", "42"]]


def test_write_brightness_busy_device_is_skipped(tmp_path, monkeypatch) -> None:
    dev = BacklightDevice(_make_device(tmp_path, "panel", max_brightness=255))

    def _busy(self, *_a, **_kw):
        raise OSError(errno.EBUSY, "Device or resource busy")

    monkeypatch.setattr(Path, "write_text", _busy)
    ran: list[list[str]] = []
    monkeypatch.setattr(backlight_mod, "run_command", lambda argv, **_kw: ran.append(argv))

    assert dev.write_brightness(42) is False
    assert ran == []


def test_limits_from_device_and_config(tmp_path) -> None:
    dev = BacklightDevice(_make_device(tmp_path, "panel", max_brightness=1000))
    cfg = SimpleNamespace(min_brightness=5, default_brightness_percent=50)

    limits = read_brightness_limits(cfg, dev)
    assert (limits.minimum, limits.default, limits.maximum) == (5, 500, 1000)

    fallback = read_brightness_limits(cfg, None)
    assert fallback.maximum == 255
