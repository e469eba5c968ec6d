"""Thin NetworkManager (`nmcli`) wrappers shared by Wi-Fi and mobile data."""

from __future__ import annotations

from typing import Optional

from .commands import run_checked, run_command, tool_available


def split_terse(line: str) -> list[str]:
    """Split one `nmcli -t` line on unescaped ':' and unescape fields."""

    fields: list[str] = []
    cur: list[str] = []
    escaped = False
    for ch in line:
        if escaped:
            cur.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ":":
            fields.append("".join(cur))
            cur = []
        else:
            cur.append(ch)
    fields.append("".join(cur))
    return fields


def parse_radio_state(stdout: Optional[str]) -> Optional[bool]:
    if stdout is None:
        return None
    s = stdout.strip().lower()
    if s == "enabled":
        return True
    if s == "disabled":
        return False
    return None


def radio_enabled(kind: str) -> Optional[bool]:
    """`nmcli radio wifi|wwan` as a bool; None when unknown."""

    return parse_radio_state(run_command(["nmcli", "radio", kind]))


def set_radio(kind: str, on: bool) -> None:
    run_checked(["nmcli", "radio", kind, "on" if on else "off"])


def device_types() -> dict[str, str]:
    """Map of network interface -> NetworkManager device type (wifi, gsm, bt...)."""

    out = run_command(["nmcli", "-t", "-f", "DEVICE,TYPE", "device"])
    if not out:
        return {}

    types: dict[str, str] = {}
    for line in out.splitlines():
        fields = split_terse(line)
        if len(fields) >= 2 and fields[0]:
            types[fields[0]] = fields[1].strip().lower()
    return types


def has_device_type(*wanted: str) -> bool:
    if not tool_available("nmcli"):
        return False
    return any(t in wanted for t in device_types().values())


def active_connection_state(name: str) -> Optional[str]:
    """State of the active connection called *name* (activating, activated, ...)."""

    out = run_command(["nmcli", "-t", "-f", "NAME,STATE", "connection", "show", "--active"])
    if not out:
        return None
    for line in out.splitlines():
        fields = split_terse(line)
        if len(fields) >= 2 and fields[0] == name:
            return fields[1].strip().lower()
    return None


def connection_down(name: str) -> None:
    run_checked(["nmcli", "connection", "down", "id", name])
