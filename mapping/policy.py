"""
Purpose: Central configuration for map drawing.
What it does:

Stores tile layer settings, fit-bounds padding / zoom ceiling, and the
look of route lines, endpoint markers and the user marker.

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MapPolicy:
    # --- Tiles / initial view ---
    tiles: str = "OpenStreetMap"
    initial_center: Tuple[float, float] = (23.6739, 86.9524)  # Asansol
    initial_zoom: int = 13

    # --- Viewport fitting ---
    fit_padding_px: int = 50
    fit_max_zoom: int = 16

    # --- Route line ---
    route_weight: int = 6
    route_opacity: float = 0.85

    # --- Endpoint markers ---
    start_marker_color: str = "#16a34a"
    end_marker_color: str = "#dc2626"

    # --- User marker / accuracy radius ---
    user_marker_color: str = "#2563eb"
    accuracy_circle_color: str = "#3b82f6"

    def validate(self) -> None:
        if self.fit_padding_px < 0:
            raise ValueError("fit_padding_px must be >= 0")

        if not 0 < self.fit_max_zoom <= 22:
            raise ValueError("fit_max_zoom must be in 1..22")

        if not 0 < self.route_opacity <= 1:
            raise ValueError("route_opacity must be in (0, 1]")


def default_map_policy() -> MapPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MapPolicy()
    p.validate()
    return p
