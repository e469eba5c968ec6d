from __future__ import annotations

from typing import Any

from .base import CapabilitySpec
from .bluetooth import build_bluetooth_spec
from .mobile_data import build_mobile_data_spec
from .wifi import build_wifi_spec


def build_capability_specs(config: Any = None) -> list[CapabilitySpec]:
    """Default capabilities in display order: Wi-Fi, mobile data, Bluetooth."""

    hotspot = str(getattr(config, "hotspot_connection", "") or "Hotspot")
    return [
        build_wifi_spec(hotspot_connection=hotspot),
        build_mobile_data_spec(),
        build_bluetooth_spec(),
    ]
