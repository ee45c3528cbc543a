"""
Purpose: Route calculation orchestrator / decision pipeline (the "glue").
What it does:
Takes two free-text places and a travel mode, then:

1. geocodes the origin, waits the inter-request delay, geocodes the destination
2. fetches route alternatives for the resolved pair
3. scores every candidate, drops the ones that cannot be drawn
4. ranks them into a new RouteSet, auto-selects the best and draws it

Only one calculation runs at a time; a second call while one is in flight
is rejected with BusyError rather than queued. A failed calculation leaves
the previous RouteSet (and what is drawn) untouched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Protocol

from geocoding.nominatim_client import GeocodeNotFound, GeocodeResult
from mapping.synchronizer import MapSynchronizer
from routing.models import Coordinate, RouteCandidate, TravelMode
from routing.osrm_client import NoRoutesFound, RouteProviderError
from safety.models import RouteSet, ScoredRoute, SelectedRoute
from safety.ranking import RouteSelector, StaleRouteSetError, rank_routes
from safety.scoring import SafetyScorer

from .policy import PlannerPolicy, default_planner_policy

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    def resolve(self, address: str) -> GeocodeResult: ...


class RouteProvider(Protocol):
    def fetch_routes(self, origin: Coordinate, destination: Coordinate, mode: TravelMode) -> List[RouteCandidate]: ...


class RouteCalculationError(Exception):
    """A failure the user should see. str(error) is the message."""
    pass


class UserInputError(RouteCalculationError):
    pass


class BusyError(RouteCalculationError):
    pass


class MapNotReadyError(RouteCalculationError):
    pass


class RouteOrchestrator:
    """
    Owns the busy flag, the last error message and the current RouteSet.

    The HTTP clients are blocking (requests); they are awaited through
    asyncio.to_thread so the event loop keeps serving tracking callbacks.
    """
    def __init__(
        self,
        geocoder: Geocoder,
        route_provider: RouteProvider,
        map_sync: MapSynchronizer,
        scorer: Optional[SafetyScorer] = None,
        policy: Optional[PlannerPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.geocoder = geocoder
        self.route_provider = route_provider
        self.map_sync = map_sync
        self.scorer = scorer or SafetyScorer()
        self.policy = policy or default_planner_policy()
        self.sleep = sleep

        self.selector = RouteSelector()
        self.calculating = False
        self.error: Optional[str] = None

    @property
    def route_set(self) -> Optional[RouteSet]:
        return self.selector.current

    @property
    def selected(self) -> Optional[SelectedRoute]:
        return self.selector.selected

    async def calculate(self, origin_text: str, destination_text: str, mode: str | TravelMode = TravelMode.DRIVING) -> RouteSet:
        if self.calculating:
            raise BusyError("A route is already being calculated")

        origin_text = (origin_text or "").strip()
        destination_text = (destination_text or "").strip()
        try:
            if not origin_text or not destination_text:
                raise UserInputError("Please enter both a starting point and a destination")
            try:
                mode = TravelMode.coerce(mode)
            except ValueError:
                raise UserInputError(f"Unsupported travel mode: {mode}") from None
            if not self.map_sync.is_ready:
                raise MapNotReadyError("The map is still loading. Please try again in a moment")
        except RouteCalculationError as error:
            self.error = str(error)
            raise

        self.calculating = True
        self.error = None
        try:
            route_set = await self._run(origin_text, destination_text, mode)
        except RouteCalculationError as error:
            self.error = str(error)
            logger.info("Route calculation failed: %s", error)
            raise
        finally:
            self.calculating = False
        return route_set

    async def _run(self, origin_text: str, destination_text: str, mode: TravelMode) -> RouteSet:
        origin = await self._geocode(origin_text, "origin")
        await self.sleep(self.policy.geocode_delay_seconds)
        destination = await self._geocode(destination_text, "destination")

        logger.info(
            "Routing %s -> %s (%s)", origin.display_name, destination.display_name, mode.value
        )
        try:
            candidates = await asyncio.to_thread(
                self.route_provider.fetch_routes, origin.coordinate, destination.coordinate, mode
            )
        except NoRoutesFound as exc:
            raise RouteCalculationError("No routes found between these locations") from exc
        except RouteProviderError as exc:
            raise RouteCalculationError(str(exc)) from exc

        scored = self._score(candidates)
        if not scored:
            raise RouteCalculationError("Route processing failed")

        # no awaits from here on: the swap, selection and draw happen together
        route_set = rank_routes(scored, version=self.selector.next_version())
        self.selector.replace(route_set)
        selected = self.selector.select(route_set, 0)
        self.map_sync.draw_route(selected.route)
        return route_set

    async def _geocode(self, text: str, role: str) -> GeocodeResult:
        try:
            return await asyncio.to_thread(self.geocoder.resolve, text)
        except GeocodeNotFound as exc:
            raise RouteCalculationError(f"{role.capitalize()} not found: {text}") from exc

    def _score(self, candidates: List[RouteCandidate]) -> List[ScoredRoute]:
        scored: List[ScoredRoute] = []
        for index, route in enumerate(candidates):
            if len(route.geometry) < self.policy.min_geometry_points:
                logger.warning("Dropping route %d: missing geometry", index)
                continue
            scored.append(self.scorer.score_route(route, index))
        return scored

    def select_route(self, version: int, position: int) -> SelectedRoute:
        """
        Select another entry of the current RouteSet (e.g. a click in the
        route list) and redraw. `version` is the RouteSet version the caller
        was showing.
        """
        current = self.selector.current
        if current is None or current.version != version:
            raise StaleRouteSetError(f"RouteSet v{version} is no longer current")
        selected = self.selector.select(current, position)
        self.map_sync.draw_route(selected.route)
        return selected

    def reset(self) -> None:
        """Forget the current RouteSet and clear drawn routes."""
        self.selector.clear()
        self.map_sync.clear_route_layers()
        self.error = None
