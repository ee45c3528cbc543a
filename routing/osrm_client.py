#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route)
#profile vocabulary (driving / foot)
#parsing response JSON (GeoJSON lon/lat) into RouteCandidate
#It should not contain scoring or ranking.

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import requests
from dotenv import load_dotenv

from .models import Coordinate, RouteCandidate, TravelMode

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=https://router.project-osrm.org
load_dotenv()
BASE_URL = os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org")
DEFAULT_TIMEOUT = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

logger = logging.getLogger(__name__)


class RouteProviderError(Exception):
    """Transport failure or a non-success OSRM status. The message is shown to the user."""
    pass


class NoRoutesFound(Exception):
    """OSRM answered successfully but had no route between the two points."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) -> OSRM (lon,lat) and back
    - Return normalized RouteCandidate objects

    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or BASE_URL or "").rstrip("/")
        self.timeout = timeout #the time to wait for a response from OSRM before giving up
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def format_coordinates(self, coords: Sequence[Coordinate]) -> str:
        """Convert Coordinates to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join("{},{}".format(*c.as_lon_lat()) for c in coords)

    def _get(self, profile: str, coords: Sequence[Coordinate], params: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.base_url}/route/v1/{profile}/{self.format_coordinates(coords)}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RouteProviderError(f"Routing service unreachable: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise RouteProviderError(
                f"Routing service returned an invalid response (HTTP {response.status_code})"
            ) from exc

        if not isinstance(data, dict):
            raise RouteProviderError("Routing service returned an invalid response")
        return data

    #----------------
    # Public methods
    #----------------
    def fetch_routes(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: str | TravelMode = TravelMode.DRIVING,
    ) -> List[RouteCandidate]:
        """
        Calls the OSRM /route endpoint with full geometry, alternatives and steps.

        Returns:
            list of RouteCandidate in provider order (first is OSRM's preferred route)

        Raises:
            NoRoutesFound: OSRM reported no route between the points
            RouteProviderError: transport failure or non-Ok status
        """
        mode = TravelMode.coerce(mode)
        data = self._get(
            mode.profile,
            [origin, destination],
            params={
                "overview": "full",
                "geometries": "geojson",
                "alternatives": "true",
                "steps": "true",
            },
        )

        code = data.get("code")
        if code == "NoRoute":
            raise NoRoutesFound(data.get("message", "No route found between these locations"))
        if code != "Ok":
            raise RouteProviderError(f"OSRM error: {data.get('message', code or 'Unknown error')}")

        routes = data.get("routes") or []
        if not routes:
            raise NoRoutesFound("No route found between these locations")

        try:
            candidates = [self._parse_route(route) for route in routes]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise RouteProviderError("Routing service returned malformed route data") from exc
        logger.debug("OSRM returned %d route(s) for profile %s", len(candidates), mode.profile)
        return candidates

    @staticmethod
    def _parse_route(route: Dict[str, Any]) -> RouteCandidate:
        # GeoJSON is [lon, lat]; swap to internal (lat, lon)
        raw_coords = (route.get("geometry") or {}).get("coordinates") or []
        geometry = tuple(Coordinate(latitude=float(lat), longitude=float(lon)) for lon, lat in raw_coords)

        legs = route.get("legs") or []
        step_count = len(legs[0].get("steps") or []) if legs else 0

        return RouteCandidate(
            geometry=geometry,
            distance_m=float(route.get("distance", 0.0)),
            duration_s=float(route.get("duration", 0.0)),
            step_count=step_count,
        )
