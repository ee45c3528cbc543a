"""
Safety domain package.

Public API:
- Domain models: ScoredRoute, RouteSet, SelectedRoute, SafetyLevel
- Scoring: SafetyScorer, safety_label, safety_color, legend
- Ranking: rank_routes, RouteSelector
- Policy: SafetyPolicy, default_safety_policy
"""
from .models import RouteSet, SafetyLevel, ScoredRoute, SelectedRoute
from .policy import SafetyPolicy, default_safety_policy
from .ranking import RouteIndexError, RouteSelector, StaleRouteSetError, rank_routes
from .scoring import SafetyScorer, legend, safety_color, safety_label

__all__ = [
    "RouteSet",
    "SafetyLevel",
    "ScoredRoute",
    "SelectedRoute",
    "SafetyPolicy",
    "default_safety_policy",
    "RouteIndexError",
    "RouteSelector",
    "StaleRouteSetError",
    "rank_routes",
    "SafetyScorer",
    "legend",
    "safety_color",
    "safety_label",
]
