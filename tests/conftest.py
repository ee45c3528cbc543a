from typing import Any, Dict, List

import pytest

import requests

from geocoding.nominatim_client import GeocodeNotFound, GeocodeResult
from mapping.synchronizer import MapSynchronizer
from routing.models import Coordinate, RouteCandidate
from tracking.models import DevicePosition, LocationError


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

class MockResponse:
    def __init__(self, json_data: Any = None, status_code: int = 200, invalid_json: bool = False):
        self._json = json_data
        self.status_code = status_code
        self.invalid_json = invalid_json

    def json(self):
        if self.invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class MockSession:
    """Stands in for requests.Session; replays one response (or exception) per call."""
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# ---------------------------------------------------------------------------
# Map
# ---------------------------------------------------------------------------

class RecordingRenderer:
    """MapRenderer that keeps drawn layers in a dict so tests can inspect them."""
    def __init__(self):
        self.layers: Dict[int, Dict[str, Any]] = {}
        self.removed: List[int] = []
        self.fits: List[Dict[str, Any]] = []
        self.views: List[Dict[str, Any]] = []
        self._next_id = 0

    def _add(self, **layer) -> int:
        self._next_id += 1
        self.layers[self._next_id] = layer
        return self._next_id

    def add_polyline(self, points, color, weight, opacity):
        return self._add(kind="polyline", points=list(points), color=color, weight=weight, opacity=opacity)

    def add_marker(self, coordinate, icon_html, popup):
        return self._add(kind="marker", coordinate=coordinate, icon_html=icon_html, popup=popup)

    def add_circle(self, coordinate, radius_m, color):
        return self._add(kind="circle", coordinate=coordinate, radius_m=radius_m, color=color)

    def remove_layer(self, layer):
        if layer not in self.layers:
            raise KeyError(f"layer {layer} was not on the map")
        del self.layers[layer]
        self.removed.append(layer)

    def fit_bounds(self, bounds, padding, max_zoom):
        self.fits.append({"bounds": bounds, "padding": padding, "max_zoom": max_zoom})

    def set_view(self, coordinate, zoom):
        self.views.append({"coordinate": coordinate, "zoom": zoom})

    def of_kind(self, kind: str) -> List[Dict[str, Any]]:
        return [layer for layer in self.layers.values() if layer["kind"] == kind]


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def map_sync(renderer):
    return MapSynchronizer(renderer)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

class FixedRandom:
    """random.Random stand-in whose uniform() always returns `value`."""
    def __init__(self, value: float = 0.0):
        self.value = value
        self.calls = []

    def uniform(self, a, b):
        self.calls.append((a, b))
        return self.value


def make_route(distance_m=1500.0, duration_s=120.0, step_count=3, points=None) -> RouteCandidate:
    if points is None:
        points = [(23.6300, 86.9000), (23.6500, 86.9300), (23.6800, 86.9600)]
    return RouteCandidate(
        geometry=tuple(Coordinate(latitude=lat, longitude=lon) for lat, lon in points),
        distance_m=distance_m,
        duration_s=duration_s,
        step_count=step_count,
    )


class FakeGeocoder:
    def __init__(self, places: Dict[str, Coordinate]):
        self.places = places
        self.queries: List[str] = []

    def resolve(self, address):
        self.queries.append(address)
        if address not in self.places:
            raise GeocodeNotFound(address)
        return GeocodeResult(coordinate=self.places[address], display_name=address)


class FakeRouteProvider:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def fetch_routes(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        if isinstance(self.result, Exception):
            raise self.result
        return list(self.result)


# ---------------------------------------------------------------------------
# Device location
# ---------------------------------------------------------------------------

class ScriptedLocationSource:
    """
    LocationSource that answers one-shot requests from a script and lets the
    test push watch updates by hand, like a browser firing callbacks.
    """
    def __init__(self, *fixes):
        self.fixes = list(fixes)
        self.requests = []
        self.watches: Dict[int, Any] = {}
        self.watch_options = []
        self.cleared: List[int] = []
        self._next_handle = 0

    async def get_current_position(self, options):
        self.requests.append(options)
        result = self.fixes.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def watch_position(self, on_position, on_error, options):
        self._next_handle += 1
        self.watches[self._next_handle] = (on_position, on_error)
        self.watch_options.append(options)
        return self._next_handle

    def clear_watch(self, handle):
        self.cleared.append(handle)
        self.watches.pop(handle, None)

    @property
    def active_watches(self) -> int:
        return len(self.watches)

    def emit_position(self, latitude, longitude, accuracy=10.0):
        for on_position, _ in list(self.watches.values()):
            on_position(DevicePosition(latitude, longitude, accuracy))

    def emit_error(self, code):
        for _, on_error in list(self.watches.values()):
            on_error(LocationError(code))
