from __future__ import annotations

from . import nmcli
from .base import CapabilitySpec


def build_mobile_data_spec() -> CapabilitySpec:
    """Mobile data through NetworkManager's WWAN radio switch."""

    def query() -> bool:
        return nmcli.radio_enabled("wwan") is True

    def command(on: bool) -> None:
        nmcli.set_radio("wwan", on)

    return CapabilitySpec(
        key="mobile_data",
        label="Mobile data",
        query=query,
        command=command,
        is_present=lambda: nmcli.has_device_type("gsm", "cdma"),
    )
