"""
Purpose: Safety heuristic for a single route (the "how safe is this" layer).
What it does:

Computes for each RouteCandidate:

base + distance bonus + step-count bonus + speed bonus

plus one uniformly random perturbation term (unmodeled variance)

clamped to the policy range and rounded to one decimal.

Maps a score to a label (Safe / Moderate / Risky) and a color
(green / amber / red). The same mapping feeds the legend, the route
list and the polyline so they never disagree.

Rule: Scoring rates routes; it does not sort them or touch the map.
"""

from __future__ import annotations

import random
from typing import List, NamedTuple, Optional

from routing.models import RouteCandidate

from .models import SafetyLevel, ScoredRoute
from .policy import SafetyPolicy, default_safety_policy


class LegendEntry(NamedTuple):
    level: SafetyLevel
    range_text: str
    color: str


def safety_label(score: float, policy: Optional[SafetyPolicy] = None) -> SafetyLevel:
    policy = policy or default_safety_policy()
    if score >= policy.safe_threshold:
        return SafetyLevel.SAFE
    if score >= policy.moderate_threshold:
        return SafetyLevel.MODERATE
    return SafetyLevel.RISKY


def safety_color(score: float, policy: Optional[SafetyPolicy] = None) -> str:
    policy = policy or default_safety_policy()
    return color_for_level(safety_label(score, policy), policy)


def color_for_level(level: SafetyLevel, policy: Optional[SafetyPolicy] = None) -> str:
    policy = policy or default_safety_policy()
    return {
        SafetyLevel.SAFE: policy.safe_color,
        SafetyLevel.MODERATE: policy.moderate_color,
        SafetyLevel.RISKY: policy.risky_color,
    }[level]


def legend(policy: Optional[SafetyPolicy] = None) -> List[LegendEntry]:
    """
    Legend rows, safest first. Ranges are derived from the same thresholds
    used by safety_label().
    """
    policy = policy or default_safety_policy()
    return [
        LegendEntry(SafetyLevel.SAFE, f"{policy.safe_threshold:.1f}+", policy.safe_color),
        LegendEntry(
            SafetyLevel.MODERATE,
            f"{policy.moderate_threshold:.1f}-{policy.safe_threshold - 0.1:.1f}",
            policy.moderate_color,
        ),
        LegendEntry(SafetyLevel.RISKY, f"<{policy.moderate_threshold:.1f}", policy.risky_color),
    ]


def format_distance(distance_m: float) -> str:
    if distance_m < 1000:
        return f"{int(round(distance_m))} m"
    return f"{distance_m / 1000.0:.1f} km"


def format_duration(duration_s: float) -> str:
    minutes = int(round(duration_s / 60.0))
    if minutes < 60:
        return f"{max(minutes, 1)} min"
    hours, minutes = divmod(minutes, 60)
    if minutes == 0:
        return f"{hours} h"
    return f"{hours} h {minutes} min"


class SafetyScorer:
    """
    Heuristic route scorer.

    The random source is injected so tests can pin the perturbation term;
    in production it is an unseeded random.Random and the score is not
    reproducible between calls.
    """
    def __init__(self, policy: Optional[SafetyPolicy] = None, rng: Optional[random.Random] = None):
        self.policy = policy or default_safety_policy()
        self.rng = rng or random.Random()

    def base_score(self, route: RouteCandidate) -> float:
        """Deterministic part of the score (everything except the perturbation)."""
        policy = self.policy
        score = policy.base_score
        distance_km = route.distance_km

        if distance_km < policy.short_route_km:
            score += policy.short_route_bonus
        elif distance_km > policy.long_route_km:
            score += policy.long_route_penalty

        if route.step_count < policy.few_steps:
            score += policy.few_steps_bonus
        elif route.step_count > policy.many_steps:
            score += policy.many_steps_penalty

        # zero-duration routes have no meaningful speed
        if route.duration_s > 0:
            speed_kmh = distance_km / (route.duration_s / 3600.0)
            if policy.steady_speed_min_kmh < speed_kmh < policy.steady_speed_max_kmh:
                score += policy.steady_speed_bonus

        return score

    def score(self, route: RouteCandidate) -> float:
        policy = self.policy
        raw = self.base_score(route) + self.rng.uniform(-policy.perturbation, policy.perturbation)
        clamped = min(policy.max_score, max(policy.min_score, raw))
        return round(clamped, 1)

    def score_route(self, route: RouteCandidate, index: int) -> ScoredRoute:
        value = self.score(route)
        level = safety_label(value, self.policy)
        return ScoredRoute(
            route=route,
            index=index,
            safety_score=value,
            safety_label=level,
            safety_color=color_for_level(level, self.policy),
            distance_label=format_distance(route.distance_m),
            duration_label=format_duration(route.duration_s),
        )
