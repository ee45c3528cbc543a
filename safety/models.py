"""
Purpose: Domain models for scored and ranked routes.
What it does:
- ScoredRoute (route, provider index, safety score, display labels)
- RouteSet (version, routes ordered by descending score)
- SelectedRoute (version + position into the current RouteSet)
- SafetyLevel = SAFE | MODERATE | RISKY

Rule: No scoring math, no map calls. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from routing.models import RouteCandidate


class SafetyLevel(str, Enum):
    SAFE = "Safe"
    MODERATE = "Moderate"
    RISKY = "Risky"


@dataclass(frozen=True)
class ScoredRoute:
    route: RouteCandidate
    index: int  # position in the provider's response
    safety_score: float
    safety_label: SafetyLevel
    safety_color: str
    distance_label: str
    duration_label: str


@dataclass(frozen=True)
class RouteSet:
    """
    One calculation's worth of scored routes, best first.
    Immutable: a new calculation produces a new RouteSet with a higher version.
    """
    version: int
    routes: Tuple[ScoredRoute, ...]

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self) -> Iterator[ScoredRoute]:
        return iter(self.routes)

    def __getitem__(self, position: int) -> ScoredRoute:
        return self.routes[position]

    @property
    def best(self) -> Optional[ScoredRoute]:
        return self.routes[0] if self.routes else None


@dataclass(frozen=True)
class SelectedRoute:
    version: int
    position: int
    route: ScoredRoute
