#Purpose: The map rendering seam.
#Declares what the synchronizer needs from a map (polylines, markers,
#circles, viewport control) without tying it to a specific map library.
#Layer handles are opaque: whatever add_* returns is what remove_layer accepts.

from __future__ import annotations

from typing import Any, Protocol, Sequence, Tuple

from routing.models import Coordinate

# (south_west, north_east)
Bounds = Tuple[Coordinate, Coordinate]


class MapRenderer(Protocol):
    def add_polyline(self, points: Sequence[Coordinate], color: str, weight: int, opacity: float) -> Any: ...

    def add_marker(self, coordinate: Coordinate, icon_html: str, popup: str) -> Any: ...

    def add_circle(self, coordinate: Coordinate, radius_m: float, color: str) -> Any: ...

    def remove_layer(self, layer: Any) -> None: ...

    def fit_bounds(self, bounds: Bounds, padding: int, max_zoom: int) -> None: ...

    def set_view(self, coordinate: Coordinate, zoom: int) -> None: ...


def bounds_of(points: Sequence[Coordinate]) -> Bounds:
    lats = [p.latitude for p in points]
    lons = [p.longitude for p in points]
    return (
        Coordinate(latitude=min(lats), longitude=min(lons)),
        Coordinate(latitude=max(lats), longitude=max(lons)),
    )


def is_degenerate(bounds: Bounds) -> bool:
    south_west, north_east = bounds
    return south_west.latitude == north_east.latitude and south_west.longitude == north_east.longitude
