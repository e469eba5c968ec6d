from .base import CapabilitySpec, DisplayState
from .reconcile import Outcome, ReconciliationAttempt, reconcile
from .registry import build_capability_specs
from .tracker import CapabilityTracker

__all__ = [
    "CapabilitySpec",
    "CapabilityTracker",
    "DisplayState",
    "Outcome",
    "ReconciliationAttempt",
    "build_capability_specs",
    "reconcile",
]
