import pytest

from conftest import FixedRandom, RecordingRenderer, make_route
from mapping.synchronizer import MapSynchronizer
from routing.models import Coordinate
from safety.policy import default_safety_policy
from safety.scoring import SafetyScorer
from tracking.models import TrackedLocation


def _scored(value=9.5, points=None, index=0):
    route = make_route(distance_m=1500.0, duration_s=120.0, step_count=3, points=points)
    return SafetyScorer(rng=FixedRandom(value - 9.5)).score_route(route, index)


def test_draw_route_adds_polyline_markers_and_fits(renderer, map_sync):
    scored = _scored(9.5)

    map_sync.draw_route(scored)

    # 1. one polyline in the safety color, start and end markers
    polylines = renderer.of_kind("polyline")
    markers = renderer.of_kind("marker")
    assert len(polylines) == 1
    assert polylines[0]["color"] == default_safety_policy().safe_color
    assert polylines[0]["points"] == list(scored.route.geometry)
    assert len(markers) == 2
    assert markers[0]["coordinate"] == scored.route.geometry[0]
    assert markers[1]["coordinate"] == scored.route.geometry[-1]
    assert "Start" in markers[0]["popup"]
    assert "Destination" in markers[1]["popup"]

    # 2. viewport fitted with fixed padding and zoom ceiling
    assert len(renderer.fits) == 1
    fit = renderer.fits[0]
    assert fit["padding"] == map_sync.policy.fit_padding_px
    assert fit["max_zoom"] == map_sync.policy.fit_max_zoom
    south_west, north_east = fit["bounds"]
    assert south_west == Coordinate(23.63, 86.90)
    assert north_east == Coordinate(23.68, 86.96)


def test_redraw_replaces_previous_layers(renderer, map_sync):
    """
    Drawing a new selection must not leave the previous polyline/markers behind.
    """
    map_sync.draw_route(_scored(9.5, index=0))
    map_sync.draw_route(_scored(4.0, index=1))
    map_sync.draw_route(_scored(6.0, index=2))

    assert len(renderer.of_kind("polyline")) == 1
    assert len(renderer.of_kind("marker")) == 2
    assert renderer.of_kind("polyline")[0]["color"] == default_safety_policy().moderate_color
    assert len(map_sync.route_layers) == 3


def test_clear_route_layers_is_idempotent(renderer, map_sync):
    map_sync.draw_route(_scored())

    map_sync.clear_route_layers()
    after_first = dict(renderer.layers)
    map_sync.clear_route_layers()

    assert renderer.layers == after_first == {}
    assert map_sync.route_layers == []


def test_degenerate_route_skips_fit(renderer, map_sync):
    same_point = [(23.65, 86.93), (23.65, 86.93)]
    map_sync.draw_route(_scored(points=same_point))

    assert len(renderer.of_kind("polyline")) == 1
    assert renderer.fits == []


def test_user_marker_is_replaced_not_stacked(renderer, map_sync):
    map_sync.upsert_user_marker(TrackedLocation(Coordinate(23.65, 86.93), accuracy_m=25.0))
    map_sync.upsert_user_marker(TrackedLocation(Coordinate(23.66, 86.94), accuracy_m=12.0))

    circles = renderer.of_kind("circle")
    markers = renderer.of_kind("marker")
    assert len(circles) == 1
    assert len(markers) == 1
    assert circles[0]["radius_m"] == 12.0
    assert circles[0]["coordinate"] == Coordinate(23.66, 86.94)
    assert markers[0]["coordinate"] == Coordinate(23.66, 86.94)

    map_sync.remove_user_marker()
    map_sync.remove_user_marker()
    assert renderer.layers == {}


def test_route_and_user_layers_are_independent(renderer, map_sync):
    """
    A location update between two route draws must survive the redraw,
    and clearing routes must not remove the user marker.
    """
    map_sync.draw_route(_scored())
    map_sync.upsert_user_marker(TrackedLocation(Coordinate(23.65, 86.93), accuracy_m=30.0))
    map_sync.draw_route(_scored(index=1))

    assert len(renderer.of_kind("circle")) == 1
    assert len(renderer.of_kind("polyline")) == 1

    map_sync.clear_route_layers()
    assert len(renderer.of_kind("circle")) == 1
    assert len(renderer.of_kind("marker")) == 1  # the user marker


def test_operations_are_noops_without_a_map():
    map_sync = MapSynchronizer()

    map_sync.clear_route_layers()
    map_sync.draw_route(_scored())
    map_sync.upsert_user_marker(TrackedLocation(Coordinate(23.65, 86.93), accuracy_m=30.0))
    map_sync.remove_user_marker()
    map_sync.center_on(Coordinate(23.65, 86.93))

    assert not map_sync.is_ready
    assert map_sync.route_layers == []
    assert map_sync.user_layers == []


def test_detach_removes_everything(renderer, map_sync):
    map_sync.draw_route(_scored())
    map_sync.upsert_user_marker(TrackedLocation(Coordinate(23.65, 86.93), accuracy_m=30.0))

    map_sync.detach()

    assert renderer.layers == {}
    assert not map_sync.is_ready


def test_center_on_uses_given_zoom(renderer, map_sync):
    map_sync.center_on(Coordinate(23.65, 86.93), zoom=17)
    assert renderer.views == [{"coordinate": Coordinate(23.65, 86.93), "zoom": 17}]


def test_attach_replacing_renderer_clears_old_map(renderer, map_sync):
    map_sync.draw_route(_scored())
    map_sync.upsert_user_marker(TrackedLocation(Coordinate(23.65, 86.93), accuracy_m=30.0))
    replacement = RecordingRenderer()

    map_sync.attach(replacement)

    assert renderer.layers == {}
    assert map_sync.renderer is replacement
    assert map_sync.route_layers == []
    assert map_sync.user_layers == []

    map_sync.draw_route(_scored())
    assert len(replacement.of_kind("polyline")) == 1
    assert renderer.of_kind("polyline") == []


def test_attach_same_renderer_keeps_layers(renderer, map_sync):
    map_sync.draw_route(_scored())
    map_sync.attach(renderer)
    assert len(renderer.of_kind("polyline")) == 1
    assert len(map_sync.route_layers) == 3


def test_failed_removal_keeps_remaining_layers_tracked(renderer, map_sync):
    """
    If the renderer fails partway through a clear, the layers it did not
    remove stay tracked and a later clear finishes the job.
    """
    map_sync.draw_route(_scored())
    polyline, start, end = map_sync.route_layers
    remove_layer = renderer.remove_layer

    def flaky_remove(layer):
        if layer == start:
            raise RuntimeError("map busy")
        remove_layer(layer)

    renderer.remove_layer = flaky_remove
    with pytest.raises(RuntimeError):
        map_sync.clear_route_layers()
    assert map_sync.route_layers == [start, end]

    renderer.remove_layer = remove_layer
    map_sync.clear_route_layers()
    assert renderer.layers == {}
    assert map_sync.route_layers == []
