"""Bounded confirmation loop shared by every capability toggle.

Radio drivers apply on/off requests asynchronously and sometimes not at all.
After issuing the command once we poll the actual state with a fixed budget
and report whether it converged. The loop only ever compares against its own
desired value; if someone else flips the radio meanwhile, the outcome reflects
that.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 15
DEFAULT_POLL_INTERVAL_S = 1.0


class Outcome(str, Enum):
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class ReconciliationAttempt:
    capability: str
    desired_state: bool
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    poll_interval_s: float = DEFAULT_POLL_INTERVAL_S
    attempts_elapsed: int = 0
    outcome: Outcome | None = None

    @property
    def done(self) -> bool:
        return self.outcome is not None


def reconcile(
    attempt: ReconciliationAttempt,
    *,
    get_actual_state: Callable[[], bool],
    command: Callable[[bool], None],
    precondition: Callable[[bool], None] | None = None,
) -> Outcome:
    """Drive one attempt to a terminal outcome.

    Polls are strictly sequential with `poll_interval_s` between them; no
    sleep follows the final poll.
    """

    desired = bool(attempt.desired_state)

    if precondition is not None:
        try:
            precondition(desired)
        except Exception as exc:
            logger.warning("%s: pre-condition failed: %s", attempt.capability, exc)

    try:
        command(desired)
    except Exception as exc:
        # The subsystem may still move on its own; keep polling.
        logger.warning("%s: state change command failed: %s", attempt.capability, exc)

    max_attempts = max(1, int(attempt.max_attempts))
    for i in range(max_attempts):
        attempt.attempts_elapsed = i + 1
        state = bool(get_actual_state())
        logger.debug("%s: actual=%s desired=%s cycle=%d", attempt.capability, state, desired, i)
        if state == desired:
            attempt.outcome = Outcome.SUCCEEDED
            return attempt.outcome
        if i + 1 < max_attempts:
            time.sleep(attempt.poll_interval_s)

    attempt.outcome = Outcome.EXHAUSTED
    return attempt.outcome
