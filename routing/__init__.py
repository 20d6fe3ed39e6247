#Marks routing as a package.
#Re-exports the geo math and zone resolution so other modules import from
#routing without knowing internal file names.
#No business logic.

from .geo import distance_km, distance_between, estimate_travel_minutes
from .geocoder_client import ReverseGeocoderClient, GeocoderError
from .zones import ZoneResolver, ZoneBox, BoundingBoxZoneResolver, GeocodingZoneResolver, UNKNOWN_ZONE

__all__ = [
    "distance_km",
    "distance_between",
    "estimate_travel_minutes",
    "ReverseGeocoderClient",
    "GeocoderError",
    "ZoneResolver",
    "ZoneBox",
    "BoundingBoxZoneResolver",
    "GeocodingZoneResolver",
    "UNKNOWN_ZONE",
]
