"""
Purpose: Delivery fare quote from distance and time.
What it does:
Computes the fare breakdown shown alongside an assignment (base + distance +
time, plus a surge component when demand outstrips supply). Settlement and
payouts live elsewhere.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FareTariff:
    base_fare: int = 20        # flat fee per delivery
    per_km_rate: int = 8
    per_minute_rate: int = 1


@dataclass(frozen=True)
class FareBreakdown:
    base_fare: int
    distance_fare: int
    time_fare: int
    surge_fare: int
    total_fare: int


def calculate_delivery_fare(
    distance_km: float,
    estimated_minutes: float,
    surge_multiplier: float = 1.0,
    tariff: Optional[FareTariff] = None,
) -> FareBreakdown:
    """
    Distance and time components are rounded up to whole currency units;
    surge is charged on top of the subtotal.

    >>> calculate_delivery_fare(6, 20).total_fare
    88
    """
    if surge_multiplier < 1.0:
        raise ValueError("surge_multiplier must be >= 1.0")

    tariff = tariff or FareTariff()

    distance_fare = math.ceil(distance_km * tariff.per_km_rate)
    time_fare = math.ceil(estimated_minutes * tariff.per_minute_rate)

    subtotal = tariff.base_fare + distance_fare + time_fare
    surge_fare = math.ceil(subtotal * (surge_multiplier - 1))

    return FareBreakdown(
        base_fare=tariff.base_fare,
        distance_fare=distance_fare,
        time_fare=time_fare,
        surge_fare=surge_fare,
        total_fare=subtotal + surge_fare,
    )
