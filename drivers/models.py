"""
Purpose: Core data models for the drivers domain.
What it does:
Defines what the driver directory hands us (DriverProfile) and the per-order
snapshot the assignment engine scores (DriverCandidate), without relying on any ORM.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

LatLng = Tuple[float, float]


class DriverStatus(str, Enum):
    """
    Account status of a courier.
    """
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DriverProfile:
    """
    A courier as the directory knows it: identity, live position and lifetime stats.
    Position is None until the first location ping arrives.
    """
    id: str
    name: str
    location: Optional[LatLng]

    rating: float = 0.0            # 0-5
    completion_rate: float = 0.0   # %
    on_time_rate: float = 0.0      # %
    acceptance_rate: float = 0.0   # %
    total_deliveries: int = 0

    vehicle_type: str = "bike"
    current_zone: str = "unknown"
    home_zone: str = "unknown"

    is_online: bool = False
    is_available: bool = False
    status: DriverStatus = DriverStatus.INACTIVE
    verification_status: VerificationStatus = VerificationStatus.PENDING

    @property
    def is_eligible(self) -> bool:
        return (
            self.is_online
            and self.is_available
            and self.status == DriverStatus.ACTIVE
            and self.verification_status == VerificationStatus.VERIFIED
        )

    @classmethod
    def new(
        cls,
        driver_id: str,
        name: str,
        lat: Optional[float],
        lng: Optional[float],
        *,
        status: str | DriverStatus = DriverStatus.ACTIVE,
        verification_status: str | VerificationStatus = VerificationStatus.VERIFIED,
        is_online: bool = True,
        is_available: bool = True,
        **stats,
    ) -> DriverProfile:
        if isinstance(status, str):
            status = DriverStatus(status)
        if isinstance(verification_status, str):
            verification_status = VerificationStatus(verification_status)

        location = (lat, lng) if lat is not None and lng is not None else None

        return cls(
            id=driver_id,
            name=name,
            location=location,
            status=status,
            verification_status=verification_status,
            is_online=is_online,
            is_available=is_available,
            **stats,
        )


@dataclass(frozen=True)
class DriverCandidate:
    """
    Snapshot of an eligible courier for one specific order.
    Rebuilt on every assignment call; position and load change continuously.
    """
    id: str
    name: str
    location: LatLng
    rating: float
    completion_rate: float
    on_time_rate: float
    acceptance_rate: float
    total_deliveries: int
    active_deliveries: int
    vehicle_type: str
    current_zone: str
    home_zone: str

    # Straight-line km to the pickup, measured when the candidate was built.
    distance_to_pickup_km: float = 0.0

    @classmethod
    def from_profile(cls, profile: DriverProfile, active_deliveries: int, distance_to_pickup_km: float) -> DriverCandidate:
        if profile.location is None:
            raise ValueError(f"Driver {profile.id} has no known location")

        return cls(
            id=profile.id,
            name=profile.name,
            location=profile.location,
            rating=profile.rating,
            completion_rate=profile.completion_rate,
            on_time_rate=profile.on_time_rate,
            acceptance_rate=profile.acceptance_rate,
            total_deliveries=profile.total_deliveries,
            active_deliveries=active_deliveries,
            vehicle_type=profile.vehicle_type or "bike",
            current_zone=profile.current_zone or "unknown",
            home_zone=profile.home_zone or "unknown",
            distance_to_pickup_km=distance_to_pickup_km,
        )
