#Marks geocoding as a package and re-exports the client API.
from .nominatim_client import GeocodeNotFound, GeocodeResult, NominatimGeocoder

__all__ = [
    "GeocodeNotFound",
    "GeocodeResult",
    "NominatimGeocoder",
]
