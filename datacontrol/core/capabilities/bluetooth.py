from __future__ import annotations

from typing import Optional

from .base import CapabilitySpec
from .commands import run_checked, run_command, tool_available


def parse_powered(show_output: Optional[str]) -> Optional[bool]:
    """Read `Powered: yes|no` from `bluetoothctl show`; None without a controller."""

    if not show_output:
        return None
    for line in show_output.splitlines():
        s = line.strip()
        if not s.lower().startswith("powered:"):
            continue
        value = s.split(":", 1)[1].strip().lower()
        if value == "yes":
            return True
        if value == "no":
            return False
    return None


def read_powered() -> Optional[bool]:
    return parse_powered(run_command(["bluetoothctl", "show"]))


def adapter_present() -> bool:
    if not tool_available("bluetoothctl"):
        return False
    return read_powered() is not None


def build_bluetooth_spec() -> CapabilitySpec:
    def query() -> bool:
        return read_powered() is True

    def command(on: bool) -> None:
        run_checked(["bluetoothctl", "power", "on" if on else "off"])

    return CapabilitySpec(
        key="bluetooth",
        label="Bluetooth",
        query=query,
        command=command,
        is_present=adapter_present,
    )
