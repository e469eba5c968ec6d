from __future__ import annotations

import datacontrol.core.capabilities.tracker as tracker_mod
from datacontrol.core.capabilities import CapabilitySpec, CapabilityTracker, DisplayState, Outcome


class FakeRadio:
    def __init__(self, *, on: bool = False, applies_after: int | None = 0, present: bool = True):
        self.on = on
        self.present = present
        self.applies_after = applies_after
        self.commands: list[bool] = []
        self.queries = 0
        self._pending: bool | None = None
        self._countdown = 0

    def query(self) -> bool:
        self.queries += 1
        if self._pending is not None:
            if self._countdown <= 0:
                self.on, self._pending = self._pending, None
            else:
                self._countdown -= 1
        return self.on

    def command(self, on: bool) -> None:
        self.commands.append(on)
        if self.applies_after is None:
            return
        self._pending = on
        self._countdown = self.applies_after

    def spec(self, key: str = "wifi", label: str = "Wi-Fi") -> CapabilitySpec:
        return CapabilitySpec(
            key=key,
            label=label,
            query=self.query,
            command=self.command,
            is_present=lambda: self.present,
        )


def test_toggle_converges_and_rerenders_without_notification(monkeypatch, immediate_threads, no_sleep) -> None:
    monkeypatch.setattr(tracker_mod.threading, "Thread", immediate_threads)
    radio = FakeRadio(on=False, applies_after=2)
    notes: list[str] = []
    settled: list[int] = []

    tracker = CapabilityTracker(radio.spec(), notify=notes.append, on_settled=lambda: settled.append(1))

    assert tracker.request_state_change() is True
    assert tracker.intended_state is True
    assert radio.commands == [True]
    assert tracker.last_outcome is Outcome.SUCCEEDED
    assert notes == []
    assert settled == [1]
    assert tracker.in_flight is False
    assert tracker.get_display_state() is DisplayState.ON
    assert immediate_threads.created[0].daemon is True


def test_exhaustion_notifies_once_and_still_rerenders(monkeypatch, immediate_threads, no_sleep) -> None:
    monkeypatch.setattr(tracker_mod.threading, "Thread", immediate_threads)
    radio = FakeRadio(on=False, applies_after=None)
    notes: list[str] = []
    settled: list[int] = []

    tracker = CapabilityTracker(
        radio.spec(key="bluetooth", label="Bluetooth"),
        notify=notes.append,
        on_settled=lambda: settled.append(1),
    )
    tracker.request_state_change()

    assert tracker.last_outcome is Outcome.EXHAUSTED
    assert notes == ["Cannot change Bluetooth state."]
    assert settled == [1]
    assert len(no_sleep) == 14
    assert tracker.get_display_state() is DisplayState.OFF


def test_transitioning_while_in_flight_and_second_toggle_rejected(monkeypatch, deferred_threads, no_sleep) -> None:
    monkeypatch.setattr(tracker_mod.threading, "Thread", deferred_threads)
    radio = FakeRadio(on=False, applies_after=0)
    tracker = CapabilityTracker(radio.spec())

    assert tracker.request_state_change() is True
    assert tracker.in_flight is True
    assert tracker.get_display_state() is DisplayState.TRANSITIONING

    assert tracker.request_state_change() is False
    assert len(deferred_threads.pending) == 1

    deferred_threads.run_pending()
    assert tracker.in_flight is False
    assert tracker.get_display_state() is DisplayState.ON
    assert radio.commands == [True]


def test_absent_subsystem_is_off_and_toggle_is_noop(monkeypatch, immediate_threads) -> None:
    monkeypatch.setattr(tracker_mod.threading, "Thread", immediate_threads)
    radio = FakeRadio(on=True, present=False)
    tracker = CapabilityTracker(radio.spec(key="mobile_data", label="Mobile data"))

    assert tracker.get_actual_state() is False
    assert tracker.request_state_change() is False
    assert tracker.intended_state is None
    assert radio.commands == []
    assert radio.queries == 0
    assert immediate_threads.created == []


def test_query_failure_reads_as_off() -> None:
    def _broken() -> bool:
        raise RuntimeError("bluetoothctl hung")

    spec = CapabilitySpec(key="bluetooth", label="Bluetooth", query=_broken, command=lambda _on: None)
    tracker = CapabilityTracker(spec)

    assert tracker.get_actual_state() is False
    assert tracker.get_display_state() is DisplayState.OFF


def test_presence_check_failure_reads_as_absent() -> None:
    def _boom() -> bool:
        raise OSError("nmcli missing")

    spec = CapabilitySpec(key="wifi", label="Wi-Fi", query=lambda: True, command=lambda _on: None, is_present=_boom)
    assert CapabilityTracker(spec).is_present() is False


def test_uses_configured_budget(monkeypatch, immediate_threads, no_sleep) -> None:
    monkeypatch.setattr(tracker_mod.threading, "Thread", immediate_threads)
    radio = FakeRadio(on=False, applies_after=None)
    tracker = CapabilityTracker(radio.spec(), max_attempts=3, poll_interval_s=0.25)

    tracker.request_state_change()

    assert no_sleep == [0.25, 0.25]
    assert tracker.last_outcome is Outcome.EXHAUSTED


def test_state_query_runs_without_holding_the_slot_lock(monkeypatch, deferred_threads) -> None:
    monkeypatch.setattr(tracker_mod.threading, "Thread", deferred_threads)
    radio = FakeRadio(on=False)
    seen: list[bool] = []
    tracker: CapabilityTracker

    def _slow_query() -> bool:
        # Renders read in_flight under this lock while a toggle is querying.
        seen.append(tracker._lock.locked())
        return radio.query()

    spec = CapabilitySpec(key="wifi", label="Wi-Fi", query=_slow_query, command=radio.command)
    tracker = CapabilityTracker(spec)

    assert tracker.request_state_change() is True
    assert seen == [False]
    assert tracker.intended_state is True
    assert tracker.in_flight is True
