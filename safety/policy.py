"""
Purpose: Central configuration for the safety heuristic (single source of truth).
What it does:

Stores all tunable thresholds/bonuses:

BASE_SCORE = 7.5

SHORT_ROUTE_KM = 2 (+1.0) / LONG_ROUTE_KM = 10 (-1.5)

FEW_STEPS = 5 (+0.5) / MANY_STEPS = 15 (-0.5)

STEADY_SPEED_KMH = (30, 60) exclusive (+0.5)

PERTURBATION = +/-0.5, SCORE RANGE = [3.0, 9.5]

SAFE >= 8.0, MODERATE >= 5.0, otherwise RISKY

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SafetyPolicy:
    """
    Central configuration for route safety scoring.

    Notes:
    - The perturbation term stands for unmodeled variance; scores are
      intentionally not reproducible unless the random source is seeded.
    - Label thresholds and colors are shared by the legend, the route list
      and the drawn polyline.
    """

    base_score: float = 7.5

    # --- Distance ---
    short_route_km: float = 2.0
    short_route_bonus: float = 1.0
    long_route_km: float = 10.0
    long_route_penalty: float = -1.5

    # --- Turn-by-turn complexity ---
    few_steps: int = 5
    few_steps_bonus: float = 0.5
    many_steps: int = 15
    many_steps_penalty: float = -0.5

    # --- Implied speed (exclusive band) ---
    steady_speed_min_kmh: float = 30.0
    steady_speed_max_kmh: float = 60.0
    steady_speed_bonus: float = 0.5

    # --- Randomized term ---
    perturbation: float = 0.5

    # --- Output range ---
    min_score: float = 3.0
    max_score: float = 9.5

    # --- Labels / colors ---
    safe_threshold: float = 8.0
    moderate_threshold: float = 5.0
    safe_color: str = "#22c55e"      # green
    moderate_color: str = "#f59e0b"  # amber
    risky_color: str = "#ef4444"     # red

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.min_score > self.max_score:
            raise ValueError("min_score must be <= max_score")

        if self.short_route_km >= self.long_route_km:
            raise ValueError("short_route_km must be < long_route_km")

        if self.few_steps >= self.many_steps:
            raise ValueError("few_steps must be < many_steps")

        if self.steady_speed_min_kmh >= self.steady_speed_max_kmh:
            raise ValueError("steady speed band is empty")

        if self.perturbation < 0:
            raise ValueError("perturbation must be >= 0")

        if not (self.moderate_threshold < self.safe_threshold):
            raise ValueError("moderate_threshold must be < safe_threshold")


def default_safety_policy() -> SafetyPolicy:
    """
    Convenience factory for the default policy.
    """
    p = SafetyPolicy()
    p.validate()
    return p
