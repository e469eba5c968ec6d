"""Intent-vs-reality tracking for one toggleable capability.

Reality (radio drivers powering up, adapters negotiating) moves slowly
compared to a click, so a toggle records the user's intent immediately and
confirms it in the background. Each tracker owns a single attempt slot: a
second toggle while one is in flight is rejected rather than racing it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .base import CapabilitySpec, DisplayState
from .reconcile import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_S,
    Outcome,
    ReconciliationAttempt,
    reconcile,
)

logger = logging.getLogger(__name__)


def _noop(*_args) -> None:
    return None


class CapabilityTracker:
    """Tracks one capability described by a `CapabilitySpec`."""

    def __init__(
        self,
        spec: CapabilitySpec,
        *,
        notify: Callable[[str], None] = _noop,
        on_settled: Callable[[], None] = _noop,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
    ):
        self.spec = spec
        self.intended_state: bool | None = None
        self.last_outcome: Outcome | None = None

        self._notify = notify
        self._on_settled = on_settled
        self._max_attempts = int(max_attempts)
        self._poll_interval_s = float(poll_interval_s)

        self._lock = threading.Lock()
        self._attempt: ReconciliationAttempt | None = None

    @property
    def key(self) -> str:
        return self.spec.key

    @property
    def label(self) -> str:
        return self.spec.label

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._attempt is not None

    def is_present(self) -> bool:
        try:
            return bool(self.spec.is_present())
        except Exception as exc:
            logger.debug("%s: presence check failed: %s", self.label, exc)
            return False

    def get_actual_state(self) -> bool:
        """Live state of the subsystem; False when absent or unreadable."""

        if not self.is_present():
            logger.debug("%s: subsystem not present", self.label)
            return False
        try:
            state = bool(self.spec.query())
        except Exception as exc:
            logger.debug("%s: state query failed: %s", self.label, exc)
            return False
        logger.debug("%s: actual state %s", self.label, state)
        return state

    def get_display_state(self) -> DisplayState:
        if self.in_flight:
            return DisplayState.TRANSITIONING
        return DisplayState.ON if self.get_actual_state() else DisplayState.OFF

    def request_state_change(self) -> bool:
        """Start flipping the capability; returns without waiting.

        Returns False when the subsystem is absent or an attempt is already
        running for this capability.
        """

        logger.debug("%s toggle", self.label)
        if not self.is_present():
            logger.debug("%s: no subsystem, ignoring toggle", self.label)
            return False

        # Queried outside the lock: the state helpers are subprocesses and
        # `in_flight` is read on every render.
        desired = not self.get_actual_state()

        with self._lock:
            if self._attempt is not None:
                logger.info(
                    "%s: change to %s still in progress, ignoring toggle",
                    self.label,
                    self._attempt.desired_state,
                )
                return False

            self.intended_state = desired
            attempt = ReconciliationAttempt(
                capability=self.label,
                desired_state=desired,
                max_attempts=self._max_attempts,
                poll_interval_s=self._poll_interval_s,
            )
            self._attempt = attempt

        logger.debug("%s: desired state %s", self.label, desired)
        threading.Thread(target=self._run_attempt, args=(attempt,), daemon=True).start()
        return True

    def _run_attempt(self, attempt: ReconciliationAttempt) -> None:
        try:
            outcome = reconcile(
                attempt,
                get_actual_state=self.get_actual_state,
                command=self.spec.command,
                precondition=self.spec.precondition,
            )
            self.last_outcome = outcome
            if outcome is Outcome.EXHAUSTED:
                logger.warning(
                    "%s: state did not reach %s after %d polls",
                    self.label,
                    attempt.desired_state,
                    attempt.attempts_elapsed,
                )
                try:
                    self._notify(f"Cannot change {self.label} state.")
                except Exception as exc:
                    logger.warning("%s: failure notification failed: %s", self.label, exc)
        except Exception as exc:
            logger.exception("%s: reconciliation crashed: %s", self.label, exc)
        finally:
            with self._lock:
                if self._attempt is attempt:
                    self._attempt = None
            try:
                self._on_settled()
            except Exception as exc:
                logger.exception("%s: re-render after toggle failed: %s", self.label, exc)
