#Purpose: The reverse-geocoding "adapter/client".
#Sole responsibility: talk to a Nominatim-compatible /reverse endpoint via HTTP
#and return the zone name for a coordinate.
#Encapsulates the geocoder-specific details:
#query parameters (lat, lon, format, zoom)
#timeouts and error handling
#picking the zone field out of the address block
#It should not contain dispatch rules or scoring.


from dotenv import load_dotenv
import os
from typing import Any, Dict, Optional, Tuple
import requests

# Read geocoder base URL from environment
# Example in .env:
# GEOCODER_BASE_URL=https://nominatim.openstreetmap.org
load_dotenv()
GEOCODER_BASE_URL = os.getenv("GEOCODER_BASE_URL")

# Internal coordinate type: (lat, lng)
LatLng = Tuple[float, float]

# Address fields checked in order, most specific first.
ZONE_FIELDS = ("suburb", "neighbourhood", "city_district", "city")


class GeocoderError(Exception):
    """Raised when the geocoder cannot be reached or returns an unusable payload."""
    pass


class ReverseGeocoderClient:
    """
    Reverse geocoder adapter.

    - Talks to the geocoder via HTTP
    - Returns a normalized zone name (lowercase) for a (lat, lng) point
    """
    def __init__(self, base_url: Optional[str] = None, timeout: int = 5, zoom: int = 14, user_agent: str = "courier-assign"):
        self.base_url = base_url or GEOCODER_BASE_URL
        self.timeout = timeout #seconds to wait for the geocoder before giving up
        self.zoom = zoom #address detail level, 14 ~ suburb
        self.user_agent = user_agent

        if not self.base_url:
            raise ValueError("Geocoder base URL not set. Please set GEOCODER_BASE_URL in the .env file.")

    def reverse(self, lat: float, lng: float) -> Dict[str, Any]:
        """
        Calls /reverse and returns the raw JSON payload.
        """
        url = f"{self.base_url.rstrip('/')}/reverse"

        try:
            response = requests.get(
                url,
                params={
                    "lat": lat,
                    "lon": lng,
                    "format": "jsonv2",
                    "zoom": self.zoom,
                },
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise GeocoderError(f"Geocoder request failed: {e}") from e

        if "error" in data:
            raise GeocoderError(f"Geocoder error: {data.get('error', 'Unknown error')}")

        return data

    def zone_for(self, lat: float, lng: float) -> str:
        """
        Returns the zone name for a coordinate.
        """
        address = self.reverse(lat, lng).get("address") or {}

        for field_name in ZONE_FIELDS:
            value = address.get(field_name)
            if value:
                return str(value).strip().lower()

        raise GeocoderError(f"No zone information for ({lat}, {lng})")
