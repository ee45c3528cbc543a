"""
Purpose: Central configuration for route calculation.
What it does:

GEOCODE_DELAY_SEC = 1.0 (pause between the two geocode calls; Nominatim allows 1 req/s)

MIN_GEOMETRY_POINTS = 2 (candidates with fewer points cannot be drawn and are dropped)

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlannerPolicy:
    geocode_delay_seconds: float = 1.0
    min_geometry_points: int = 2

    def validate(self) -> None:
        if self.geocode_delay_seconds < 0:
            raise ValueError("geocode_delay_seconds must be >= 0")

        if self.min_geometry_points < 2:
            raise ValueError("min_geometry_points must be >= 2")


def default_planner_policy() -> PlannerPolicy:
    """
    Convenience factory for the default policy.
    """
    p = PlannerPolicy()
    p.validate()
    return p
