"""Action routing for tray clicks.

Radio toggles are asynchronous: the tracker re-renders when its background
attempt settles, so dispatch does not. Brightness and sleep complete on the
spot and re-render immediately. Launch shortcuts change nothing we display.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class Action(str, Enum):
    WIFI = "wifi"
    MOBILE_DATA = "mobile_data"
    BLUETOOTH = "bluetooth"
    SLEEP = "sleep"
    BRIGHTNESS = "brightness"
    SETTINGS = "settings"
    TETHER_SETTINGS = "tether_settings"


TRACKER_ACTIONS = frozenset({Action.WIFI, Action.MOBILE_DATA, Action.BLUETOOTH})
LAUNCH_ACTIONS = frozenset({Action.SETTINGS, Action.TETHER_SETTINGS})


def parse_action(action_id: Any) -> Optional[Action]:
    if isinstance(action_id, Action):
        return action_id
    try:
        return Action(str(action_id or "").strip().lower())
    except ValueError:
        return None


def dispatch(context: Any, action_id: Any) -> bool:
    """Route *action_id* to its handler.

    Returns False for unknown ids (nothing happens, no re-render).
    """

    action = parse_action(action_id)
    if action is None:
        logger.debug("Ignoring unknown action %r", action_id)
        return False

    context.log_event("menu", action.value)

    if action in TRACKER_ACTIONS:
        tracker = context.tracker(action.value)
        if tracker is None:
            logger.debug("%s: no tracker while disabled", action.value)
            return True
        tracker.request_state_change()
        return True

    if action in LAUNCH_ACTIONS:
        context.launch(action.value)
        return True

    if action is Action.SLEEP:
        context.go_to_sleep()
    elif action is Action.BRIGHTNESS:
        context.toggle_brightness()

    context.request_render(reason=action.value)
    return True
