"""Wi-Fi radio via NetworkManager.

Enabling Wi-Fi while a hotspot owns the radio does not work on most chips,
so the enable path stops an active or activating hotspot first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from . import nmcli
from .base import CapabilitySpec

logger = logging.getLogger(__name__)


class TetheringState(str, Enum):
    DISABLED = "disabled"
    ENABLING = "enabling"
    ENABLED = "enabled"


def tethering_state_from_connection(state: str | None) -> TetheringState:
    if state == "activated":
        return TetheringState.ENABLED
    if state == "activating":
        return TetheringState.ENABLING
    return TetheringState.DISABLED


def read_tethering_state(connection_name: str) -> TetheringState:
    return tethering_state_from_connection(nmcli.active_connection_state(connection_name))


def stop_tethering_before_enable(
    desired: bool,
    *,
    get_tethering_state: Callable[[], TetheringState],
    stop_tethering: Callable[[], None],
) -> bool:
    """Stop Wi-Fi tethering when Wi-Fi is about to be enabled.

    Returns True if a stop was requested.
    """

    if not desired:
        return False

    state = get_tethering_state()
    logger.debug("Actual tethering state: %s", state.value)
    if state not in (TetheringState.ENABLING, TetheringState.ENABLED):
        return False

    logger.info("Stopping Wi-Fi tethering before enabling Wi-Fi")
    stop_tethering()
    return True


def build_wifi_spec(*, hotspot_connection: str = "Hotspot") -> CapabilitySpec:
    def query() -> bool:
        return nmcli.radio_enabled("wifi") is True

    def command(on: bool) -> None:
        nmcli.set_radio("wifi", on)

    def precondition(desired: bool) -> None:
        stop_tethering_before_enable(
            desired,
            get_tethering_state=lambda: read_tethering_state(hotspot_connection),
            stop_tethering=lambda: nmcli.connection_down(hotspot_connection),
        )

    return CapabilitySpec(
        key="wifi",
        label="Wi-Fi",
        query=query,
        command=command,
        precondition=precondition,
        is_present=lambda: nmcli.has_device_type("wifi"),
    )
