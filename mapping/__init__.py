#Marks mapping as a package.
#The synchronizer and renderer seam are re-exported; the folium renderer is
#imported from mapping.folium_renderer so folium only loads when it is used.

from .policy import MapPolicy, default_map_policy
from .renderer import Bounds, MapRenderer
from .synchronizer import MapSynchronizer

__all__ = [
    "Bounds",
    "MapPolicy",
    "MapRenderer",
    "MapSynchronizer",
    "default_map_policy",
]
