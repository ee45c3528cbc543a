"""
Purpose: MapRenderer backed by folium (Leaflet), producing a standalone HTML map.
What it does:
- configures the tile layer and initial view
- adds/removes polylines, DivIcon markers with popups, and circles
- fits the viewport to bounds, or centers it on a point
- renders the safety legend and saves the result to disk
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

import folium

from routing.models import Coordinate
from safety.scoring import LegendEntry

from .policy import MapPolicy, default_map_policy
from .renderer import Bounds

logger = logging.getLogger(__name__)


class FoliumMapRenderer:
    def __init__(self, policy: Optional[MapPolicy] = None, attribution: Optional[str] = None):
        self.policy = policy or default_map_policy()
        self.map = folium.Map(
            location=list(self.policy.initial_center),
            zoom_start=self.policy.initial_zoom,
            tiles=self.policy.tiles,
            attr=attribution,
        )
        self._viewport: Optional[folium.FitBounds] = None

    def add_polyline(self, points: Sequence[Coordinate], color: str, weight: int, opacity: float) -> folium.PolyLine:
        return folium.PolyLine(
            locations=[list(p.as_lat_lon()) for p in points],
            color=color,
            weight=weight,
            opacity=opacity,
        ).add_to(self.map)

    def add_marker(self, coordinate: Coordinate, icon_html: str, popup: str) -> folium.Marker:
        return folium.Marker(
            location=list(coordinate.as_lat_lon()),
            icon=folium.DivIcon(html=icon_html, icon_size=(26, 26), icon_anchor=(13, 13)),
            popup=folium.Popup(popup, max_width=260),
        ).add_to(self.map)

    def add_circle(self, coordinate: Coordinate, radius_m: float, color: str) -> folium.Circle:
        return folium.Circle(
            location=list(coordinate.as_lat_lon()),
            radius=radius_m,
            color=color,
            weight=1,
            fill=True,
            fill_opacity=0.15,
        ).add_to(self.map)

    def remove_layer(self, layer) -> None:
        # folium has no public removal API; children are keyed by element name
        self.map._children.pop(layer.get_name(), None)

    def fit_bounds(self, bounds: Bounds, padding: int, max_zoom: int) -> None:
        south_west, north_east = bounds
        self._replace_viewport(
            folium.FitBounds(
                [list(south_west.as_lat_lon()), list(north_east.as_lat_lon())],
                padding=(padding, padding),
                max_zoom=max_zoom,
            )
        )

    def set_view(self, coordinate: Coordinate, zoom: int) -> None:
        # a zero-area fit centers on the point at the zoom ceiling
        point = list(coordinate.as_lat_lon())
        self._replace_viewport(folium.FitBounds([point, point], max_zoom=zoom))

    def _replace_viewport(self, element: folium.FitBounds) -> None:
        # only the latest viewport move is kept on the map
        if self._viewport is not None:
            self.remove_layer(self._viewport)
        self._viewport = element.add_to(self.map)

    def add_legend(self, entries: Iterable[LegendEntry]) -> None:
        items = "".join(
            f"""
                <div style="margin-bottom: 6px;">
                    <span style="background-color: {entry.color};
                                 width: 20px; height: 4px;
                                 display: inline-block; margin-right: 8px;"></span>
                    <strong>{entry.level.value}</strong> <small>({entry.range_text})</small>
                </div>
            """
            for entry in entries
        )
        legend_html = f"""
        <div style="position: fixed;
                   bottom: 40px; left: 40px; width: 190px; height: auto;
                   background-color: white; border:2px solid grey; z-index:9999;
                   font-size:14px; padding: 10px;">
            <h4 style="margin-top: 0;">Safety Legend</h4>
            {items}
        </div>
        """
        self.map.get_root().html.add_child(folium.Element(legend_html))

    def save(self, filepath: str | Path) -> Path:
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.map.save(str(path))
        logger.info("Map saved to %s", path)
        return path
