"""
Purpose: Central configuration for live tracking.
What it does:

Stores the device request options for each phase:

ONE-SHOT FIX: low accuracy, 10s timeout, accept fixes up to 60s old

RETRY AFTER TIMEOUT: low accuracy, 20s timeout, accept fixes up to 5 min old

CONTINUOUS WATCH: high accuracy, 30s per-update timeout, accept fixes up to 5s old

and the hosts that count as trusted local origins without a secure context.

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from .models import PositionOptions


@dataclass(frozen=True)
class TrackingPolicy:
    initial_fix: PositionOptions = PositionOptions(enable_high_accuracy=False, timeout_s=10.0, maximum_age_s=60.0)
    retry_fix: PositionOptions = PositionOptions(enable_high_accuracy=False, timeout_s=20.0, maximum_age_s=300.0)
    watch: PositionOptions = PositionOptions(enable_high_accuracy=True, timeout_s=30.0, maximum_age_s=5.0)

    # Zoom used when following the user
    follow_zoom: int = 16

    trusted_local_hosts: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"localhost", "127.0.0.1", "::1", "[::1]"})
    )

    def validate(self) -> None:
        for name in ("initial_fix", "retry_fix", "watch"):
            options: PositionOptions = getattr(self, name)
            if options.timeout_s <= 0:
                raise ValueError(f"{name}.timeout_s must be > 0")
            if options.maximum_age_s < 0:
                raise ValueError(f"{name}.maximum_age_s must be >= 0")

        if self.retry_fix.timeout_s < self.initial_fix.timeout_s:
            raise ValueError("retry_fix must be at least as tolerant as initial_fix")

        if self.follow_zoom <= 0:
            raise ValueError("follow_zoom must be > 0")


def default_tracking_policy() -> TrackingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = TrackingPolicy()
    p.validate()
    return p
