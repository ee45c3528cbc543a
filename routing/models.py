"""
Purpose: Shared domain models for the routing capability.
What it does:
- Coordinate (lat, lon), immutable
- TravelMode = DRIVING | WALKING, mapped to OSRM profile tokens
- RouteCandidate (geometry, distance, duration, step count) as returned by the provider

Rule: No HTTP calls, no scoring. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Coordinate:
    """
    A point in internal (lat, lon) order.
    OSRM and GeoJSON use (lon, lat); convert at the client boundary only.
    """
    latitude: float
    longitude: float

    def as_lat_lon(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def as_lon_lat(self) -> Tuple[float, float]:
        return (self.longitude, self.latitude)


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"

    @property
    def profile(self) -> str:
        """OSRM profile token for this mode."""
        return _OSRM_PROFILES[self]

    @classmethod
    def coerce(cls, mode: str | TravelMode) -> TravelMode:
        if isinstance(mode, cls):
            return mode
        return cls(str(mode).strip().lower())


_OSRM_PROFILES = {
    TravelMode.DRIVING: "driving",
    TravelMode.WALKING: "foot",
}


@dataclass(frozen=True)
class RouteCandidate:
    """
    One complete path alternative returned by the route provider.
    """
    geometry: Tuple[Coordinate, ...]
    distance_m: float
    duration_s: float
    step_count: int

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0
