"""
Purpose: Business rules and distance math for building the candidate pool of an order.
What it does:
Accepts a pickup location and the driver directory, filters out ineligible
drivers, keeps those within the search radius, and enriches each with its
current number of active deliveries from the order store.
"""

import logging
from typing import Iterable, List, Protocol, Tuple

from routing.geo import distance_between

from .directory import DriverDirectory
from .models import DriverCandidate, DriverProfile

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_RADIUS_KM = 10.0


class ActiveDeliveryCounter(Protocol):
    def count_active_deliveries(self, driver_id: str) -> int:
        ...


def filter_eligible_drivers(drivers: Iterable[DriverProfile]) -> List[DriverProfile]:
    """
    Returns only drivers who are online, available, active, verified
    and have a known position (a driver without one cannot be scored).
    """
    eligible = []

    for driver in drivers:
        if not driver.is_eligible:
            continue

        if driver.location is None:
            continue

        eligible.append(driver)

    return eligible


class CandidateProvider:
    """
    Produces the DriverCandidate list for one order.

    An empty list means "no supply", not a fault. Errors raised by the
    directory or store are left to the caller.
    """
    def __init__(self, directory: DriverDirectory, delivery_counter: ActiveDeliveryCounter):
        self.directory = directory
        self.delivery_counter = delivery_counter

    def find_candidates(
        self,
        pickup_location: Tuple[float, float],
        radius_km: float = DEFAULT_SEARCH_RADIUS_KM,
    ) -> List[DriverCandidate]:
        # The directory filters server-side; re-check so a stale cache can't leak an offline driver.
        eligible = filter_eligible_drivers(self.directory.list_eligible_drivers())

        candidates: List[DriverCandidate] = []

        for driver in eligible:
            distance = distance_between(driver.location, pickup_location)
            if distance > radius_km:
                continue

            # Load is read fresh on every call, never cached across orders.
            active_deliveries = self.delivery_counter.count_active_deliveries(driver.id)

            candidates.append(
                DriverCandidate.from_profile(
                    driver,
                    active_deliveries=active_deliveries,
                    distance_to_pickup_km=distance,
                )
            )

        # Closest first so downstream ties are stable
        candidates.sort(key=lambda candidate: (candidate.distance_to_pickup_km, candidate.id))

        logger.debug(
            f"{len(candidates)} of {len(eligible)} eligible drivers within {radius_km} km of {pickup_location}"
        )
        return candidates
