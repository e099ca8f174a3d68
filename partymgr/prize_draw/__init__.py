"""Utilities for the prize draw subsystem."""

from .engine import DrawEngine, DrawOutcome, DrawRequest
from .pending import PendingDraw
from .prizes import add_prize, can_draw, remaining_slots
from .sampling import eligible_pool, sample_with_replacement, sample_without_replacement
from .spin import CancellationToken, SpinPhase

__all__ = [
    "CancellationToken",
    "DrawEngine",
    "DrawOutcome",
    "DrawRequest",
    "PendingDraw",
    "SpinPhase",
    "add_prize",
    "can_draw",
    "eligible_pool",
    "remaining_slots",
    "sample_with_replacement",
    "sample_without_replacement",
]
