"""
Purpose: Rank scored routes and track which one is selected.
What it does:
- rank_routes: stable sort, highest safety score first (ties keep provider order)
- RouteSelector: owns the current RouteSet and the selection into it;
  rejects selections made against a superseded RouteSet (version check)
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .models import RouteSet, ScoredRoute, SelectedRoute

logger = logging.getLogger(__name__)


class StaleRouteSetError(Exception):
    """Raised when selecting from a RouteSet that is no longer current."""
    pass


class RouteIndexError(IndexError):
    """Raised when the requested position is outside the RouteSet."""
    pass


def rank_routes(scored_routes: Iterable[ScoredRoute], version: int) -> RouteSet:
    # sorted() is stable, so equal scores stay in provider order
    ranked = sorted(scored_routes, key=lambda scored: scored.safety_score, reverse=True)
    return RouteSet(version=version, routes=tuple(ranked))


class RouteSelector:
    """
    Holds at most one current RouteSet and at most one selection into it.
    """
    def __init__(self):
        self._current: Optional[RouteSet] = None
        self._selected: Optional[SelectedRoute] = None
        self._last_version = 0

    @property
    def current(self) -> Optional[RouteSet]:
        return self._current

    @property
    def selected(self) -> Optional[SelectedRoute]:
        return self._selected

    def next_version(self) -> int:
        self._last_version += 1
        return self._last_version

    def replace(self, route_set: RouteSet) -> None:
        """
        Swap in a new RouteSet. The old selection is dropped in the same step
        so no reader sees a selection pointing into the previous set.
        """
        if self._current is not None and route_set.version <= self._current.version:
            raise StaleRouteSetError(
                f"RouteSet v{route_set.version} is not newer than current v{self._current.version}"
            )
        self._current, self._selected = route_set, None
        self._last_version = max(self._last_version, route_set.version)

    def clear(self) -> None:
        self._current, self._selected = None, None

    def select(self, route_set: RouteSet, position: int) -> SelectedRoute:
        if self._current is None or route_set.version != self._current.version:
            current_version = self._current.version if self._current else None
            raise StaleRouteSetError(
                f"RouteSet v{route_set.version} was superseded (current: v{current_version})"
            )
        if not 0 <= position < len(route_set):
            raise RouteIndexError(f"Route position {position} out of range (0..{len(route_set) - 1})")

        self._selected = SelectedRoute(
            version=route_set.version,
            position=position,
            route=route_set[position],
        )
        logger.debug("Selected route %d of RouteSet v%d", position, route_set.version)
        return self._selected
