"""
Purpose: Keep the map in step with the selected route and the tracked location.
What it does:
Translates state (selected ScoredRoute, TrackedLocation) into renderer calls:
draw / clear route layers, place / remove the user marker, move the viewport.

Route layers (polyline + start/end markers) and user layers (marker +
accuracy circle) live in two disjoint collections, so a route redraw and a
location update never touch each other's layers. Every method finishes
without awaiting anything.

Every operation is a no-op until a renderer is attached.
"""

from __future__ import annotations

import html
import logging
from typing import Any, List, Optional

from routing.models import Coordinate
from safety.models import ScoredRoute

from .policy import MapPolicy, default_map_policy
from .renderer import MapRenderer, bounds_of, is_degenerate

logger = logging.getLogger(__name__)

_PIN_HTML = (
    '<div style="background:{color};color:#fff;border:2px solid #fff;border-radius:50%;'
    'width:26px;height:26px;line-height:22px;text-align:center;font-weight:bold;'
    'box-shadow:0 1px 4px rgba(0,0,0,.4);">{text}</div>'
)

_USER_DOT_HTML = (
    '<div style="background:{color};border:3px solid #fff;border-radius:50%;'
    'width:16px;height:16px;box-shadow:0 0 0 2px {color};"></div>'
)


class MapSynchronizer:
    def __init__(self, renderer: Optional[MapRenderer] = None, policy: Optional[MapPolicy] = None):
        self.renderer = renderer
        self.policy = policy or default_map_policy()
        self._route_layers: List[Any] = []
        self._user_layers: List[Any] = []

    #----------------
    # lifecycle
    #----------------
    @property
    def is_ready(self) -> bool:
        return self.renderer is not None

    def attach(self, renderer: MapRenderer) -> None:
        if self.renderer is not None and self.renderer is not renderer:
            self.detach()
        self.renderer = renderer

    def detach(self) -> None:
        """Remove everything this synchronizer drew and forget the renderer."""
        self.clear_route_layers()
        self.remove_user_marker()
        self.renderer = None

    @property
    def route_layers(self) -> List[Any]:
        return list(self._route_layers)

    @property
    def user_layers(self) -> List[Any]:
        return list(self._user_layers)

    #----------------
    # route layers
    #----------------
    def clear_route_layers(self) -> None:
        if self.renderer is None:
            return
        self._remove_layers(self._route_layers)

    def draw_route(self, scored_route: ScoredRoute) -> None:
        if self.renderer is None:
            return

        self.clear_route_layers()

        geometry = scored_route.route.geometry
        if not geometry:
            logger.warning("Route %d has no geometry; nothing drawn", scored_route.index)
            return

        policy = self.policy
        start, end = geometry[0], geometry[-1]
        summary = (
            f"Safety {scored_route.safety_score:.1f} ({scored_route.safety_label.value}) | "
            f"{scored_route.distance_label}, {scored_route.duration_label}"
        )

        self._route_layers.append(
            self.renderer.add_polyline(
                geometry,
                color=scored_route.safety_color,
                weight=policy.route_weight,
                opacity=policy.route_opacity,
            )
        )
        self._route_layers.append(
            self.renderer.add_marker(
                start,
                icon_html=_PIN_HTML.format(color=policy.start_marker_color, text="A"),
                popup=f"<b>Start</b><br>{html.escape(summary)}",
            )
        )
        self._route_layers.append(
            self.renderer.add_marker(
                end,
                icon_html=_PIN_HTML.format(color=policy.end_marker_color, text="B"),
                popup="<b>Destination</b>",
            )
        )

        bounds = bounds_of(geometry)
        if is_degenerate(bounds):
            logger.debug("Skipping fit for zero-area bounds of route %d", scored_route.index)
            return
        self.renderer.fit_bounds(bounds, padding=policy.fit_padding_px, max_zoom=policy.fit_max_zoom)

    #----------------
    # user marker
    #----------------
    def upsert_user_marker(self, location) -> None:
        """Replace the user marker and accuracy circle with ones at `location` (a TrackedLocation)."""
        if self.renderer is None:
            return

        self.remove_user_marker()
        policy = self.policy
        self._user_layers.append(
            self.renderer.add_circle(
                location.coordinate,
                radius_m=location.accuracy_m,
                color=policy.accuracy_circle_color,
            )
        )
        self._user_layers.append(
            self.renderer.add_marker(
                location.coordinate,
                icon_html=_USER_DOT_HTML.format(color=policy.user_marker_color),
                popup=f"You are here (&plusmn;{location.accuracy_m:.0f} m)",
            )
        )

    def remove_user_marker(self) -> None:
        if self.renderer is None:
            return
        self._remove_layers(self._user_layers)

    def _remove_layers(self, layers: List[Any]) -> None:
        # a layer stays tracked until the renderer has actually removed it
        while layers:
            self.renderer.remove_layer(layers[0])
            del layers[0]

    #----------------
    # viewport
    #----------------
    def center_on(self, coordinate: Coordinate, zoom: Optional[int] = None) -> None:
        if self.renderer is None:
            return
        self.renderer.set_view(coordinate, zoom if zoom is not None else self.policy.fit_max_zoom)
