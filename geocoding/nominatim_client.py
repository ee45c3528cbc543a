#Purpose: The geocoding "adapter/client".
#Sole responsibility: turn a free-text place description into a Coordinate
#using the Nominatim /search endpoint (first result only).
#No retries here - retry/delay policy belongs to the planner.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from dotenv import load_dotenv

from routing.models import Coordinate

# Example in .env:
# NOMINATIM_BASE_URL=https://nominatim.openstreetmap.org
# NOMINATIM_USER_AGENT=saferoute/0.1 (you@example.com)
load_dotenv()
BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org")
USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "saferoute/0.1")
DEFAULT_TIMEOUT = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

logger = logging.getLogger(__name__)


class GeocodeNotFound(Exception):
    """Raised when the provider has no result for the address or the request fails."""
    pass


@dataclass(frozen=True)
class GeocodeResult:
    coordinate: Coordinate
    display_name: str


class NominatimGeocoder:
    """
    Nominatim Adapter / Client
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: str = USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()

    def resolve(self, address: str) -> GeocodeResult:
        """
        Resolve an address to its first matching coordinate.

        Raises:
            ValueError: address is empty
            GeocodeNotFound: zero results, or the request itself failed
        """
        query = (address or "").strip()
        if not query:
            raise ValueError("address must be a non-empty string")

        try:
            response = self.session.get(
                f"{self.base_url}/search",
                params={"format": "json", "limit": "1", "q": query},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            results = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Geocoding request for %r failed: %s", query, exc)
            raise GeocodeNotFound(query) from exc

        if not isinstance(results, list) or not results:
            raise GeocodeNotFound(query)

        first = results[0]
        try:
            coordinate = Coordinate(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Geocoding result for %r has no usable coordinates: %s", query, exc)
            raise GeocodeNotFound(query) from exc

        return GeocodeResult(
            coordinate=coordinate,
            display_name=first.get("display_name") or query,
        )
