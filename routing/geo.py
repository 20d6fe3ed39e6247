"""
Purpose: Straight-line geo math used by candidate search and scoring.
What it does:
- great-circle (haversine) distance between two (lat, lng) points
- travel-time estimate from a distance, with an optional traffic factor

Rule: Pure functions only. Road-network routing is not used for dispatch decisions.
"""

from __future__ import annotations

import math
from typing import Tuple

LatLng = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0

# Average urban courier speed, accounts for stops and signals.
BASE_SPEED_KMH = 25.0


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance in kilometers between two coordinates.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(origin: LatLng, destination: LatLng) -> float:
    return distance_km(origin[0], origin[1], destination[0], destination[1])


def estimate_travel_minutes(distance: float, traffic_factor: float = 1.0) -> int:
    """
    Whole minutes needed to cover `distance` km at the base urban speed.

    traffic_factor > 1 slows travel down (1.5 => 25 km/h becomes ~16.7 km/h).
    """
    if traffic_factor <= 0:
        raise ValueError("traffic_factor must be > 0")

    adjusted_speed = BASE_SPEED_KMH / traffic_factor
    hours = distance / adjusted_speed
    return math.ceil(hours * 60)
