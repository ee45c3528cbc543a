#Marks routing as a package.
#Re-exports clean public APIs (OSRMClient, route models, travel modes)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .models import Coordinate, RouteCandidate, TravelMode
from .osrm_client import NoRoutesFound, OSRMClient, RouteProviderError

__all__ = [
    "Coordinate",
    "RouteCandidate",
    "TravelMode",
    "OSRMClient",
    "NoRoutesFound",
    "RouteProviderError",
]
