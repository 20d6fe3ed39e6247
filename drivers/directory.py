"""
Purpose: The driver directory collaborator.
What it does:
Declares what the assignment engine needs from wherever courier profiles live
(database, driver service) and ships an in-memory implementation used by the
tests and the simulation script.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Protocol

from .models import DriverProfile, LatLng


class DriverDirectory(Protocol):
    def list_eligible_drivers(self) -> List[DriverProfile]:
        """
        Online, available, active and verified drivers (filtered server-side).
        """
        ...


class InMemoryDriverDirectory:
    """
    Thread-safe dict-backed directory.
    """
    def __init__(self, drivers: Optional[Iterable[DriverProfile]] = None):
        self._lock = threading.Lock()
        self._drivers: Dict[str, DriverProfile] = {}
        for driver in drivers or []:
            self._drivers[driver.id] = driver

    def upsert(self, driver: DriverProfile) -> None:
        with self._lock:
            self._drivers[driver.id] = driver

    def get(self, driver_id: str) -> Optional[DriverProfile]:
        with self._lock:
            return self._drivers.get(driver_id)

    def update_location(self, driver_id: str, location: LatLng, zone: Optional[str] = None) -> DriverProfile:
        """
        Records a location ping. DriverProfile is frozen so a new instance replaces the old one.
        """
        with self._lock:
            driver = self._drivers[driver_id]
            changes = {"location": location}
            if zone is not None:
                changes["current_zone"] = zone
            driver = replace(driver, **changes)
            self._drivers[driver_id] = driver
            return driver

    def all_drivers(self) -> List[DriverProfile]:
        with self._lock:
            return list(self._drivers.values())

    def list_eligible_drivers(self) -> List[DriverProfile]:
        with self._lock:
            return [driver for driver in self._drivers.values() if driver.is_eligible]
