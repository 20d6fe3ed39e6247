"""
Purpose: Zone resolution for zone-affinity scoring.
What it does:
Maps a pickup coordinate to a coarse named zone. The assignment engine depends
only on the ZoneResolver protocol, so the resolver is chosen per deployment:

- BoundingBoxZoneResolver: static zones declared as lat/lng boxes
- GeocodingZoneResolver: asks a reverse geocoder (routing.geocoder_client)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol, Tuple

from .geocoder_client import GeocoderError, ReverseGeocoderClient

logger = logging.getLogger(__name__)

UNKNOWN_ZONE = "unknown"


class ZoneResolver(Protocol):
    def resolve(self, lat: float, lng: float) -> str:
        ...


@dataclass(frozen=True)
class ZoneBox:
    """
    Axis-aligned box in degrees. Edges are inclusive.
    """
    name: str
    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


class BoundingBoxZoneResolver:
    """
    First declared box containing the point wins. Points outside every box
    resolve to `default_zone`.
    """
    def __init__(self, zones: Optional[Iterable[ZoneBox]] = None, default_zone: str = UNKNOWN_ZONE):
        self.zones = list(zones or [])
        self.default_zone = default_zone

    def resolve(self, lat: float, lng: float) -> str:
        for zone in self.zones:
            if zone.contains(lat, lng):
                return zone.name
        return self.default_zone


class GeocodingZoneResolver:
    """
    Wraps ReverseGeocoderClient with a small coordinate cache.

    Geocoder outages degrade to `default_zone` (neutral zone score) instead of
    failing the assignment.
    """
    def __init__(self, client: ReverseGeocoderClient, default_zone: str = UNKNOWN_ZONE, precision: int = 3):
        self.client = client
        self.default_zone = default_zone
        self.precision = precision #3 decimals ~ 110m cells
        self._cache: Dict[Tuple[float, float], str] = {}

    def resolve(self, lat: float, lng: float) -> str:
        key = (round(lat, self.precision), round(lng, self.precision))
        if key in self._cache:
            return self._cache[key]

        try:
            zone = self.client.zone_for(lat, lng)
        except GeocoderError as e:
            logger.warning(f"Zone lookup failed for ({lat}, {lng}), using '{self.default_zone}': {e}")
            return self.default_zone

        self._cache[key] = zone
        return zone
