"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- OrderLocation (id, pickup coords, dropoff coords, prep time, value, priority)
- Delivery (one courier carrying one order, with a lifecycle status)
- AssignmentRecord (one row of the assignment audit ledger)

Defines enums/constants:
- OrderPriority = normal | high | urgent
- DeliveryStatus = pending | assigned | picked_up | in_transit | delivered | cancelled

Rule: No scoring, no store logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from datetime import datetime
import uuid

LatLng = Tuple[float, float]


class OrderPriority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    OrderPriority.NORMAL: 1,
    OrderPriority.HIGH: 2,
    OrderPriority.URGENT: 3,
}


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# A courier is busy with a delivery in any of these states.
ACTIVE_DELIVERY_STATUSES = frozenset({
    DeliveryStatus.ASSIGNED,
    DeliveryStatus.PICKED_UP,
    DeliveryStatus.IN_TRANSIT,
})


@dataclass(frozen=True)
class OrderLocation:
    """
    An order waiting for a courier. Produced by the order pipeline, read-only here.
    """
    order_id: str
    pickup: LatLng
    dropoff: LatLng
    estimated_prep_minutes: int = 0
    order_value: float = 0.0
    priority: OrderPriority = OrderPriority.NORMAL
    pickup_address: str = ""
    dropoff_address: str = ""

    @classmethod
    def new(
        cls,
        order_id: str,
        pickup_lat: float,
        pickup_lng: float,
        dropoff_lat: float,
        dropoff_lng: float,
        *,
        priority: str | OrderPriority = OrderPriority.NORMAL,
        estimated_prep_minutes: int = 0,
        order_value: float = 0.0,
        pickup_address: str = "",
        dropoff_address: str = "",
    ) -> OrderLocation:
        if isinstance(priority, str):
            priority = OrderPriority(priority)

        return cls(
            order_id=order_id,
            pickup=(pickup_lat, pickup_lng),
            dropoff=(dropoff_lat, dropoff_lng),
            estimated_prep_minutes=estimated_prep_minutes,
            order_value=order_value,
            priority=priority,
            pickup_address=pickup_address,
            dropoff_address=dropoff_address,
        )


@dataclass
class Delivery:
    """
    A courier's commitment to one order.
    """
    delivery_id: str
    order_id: str
    driver_id: str
    status: DeliveryStatus = DeliveryStatus.ASSIGNED

    created_at: datetime = field(default_factory=datetime.utcnow)
    picked_up_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_DELIVERY_STATUSES

    @staticmethod
    def new(order_id: str, driver_id: str) -> Delivery:
        return Delivery(
            delivery_id=str(uuid.uuid4()),
            order_id=order_id,
            driver_id=driver_id,
        )


@dataclass(frozen=True)
class AssignmentRecord:
    """
    Audit ledger row for one successful assignment (for analytics and A/B weight tuning).
    """
    order_id: str
    algorithm: str
    assigned_driver_id: str
    search_radius_km: float
    drivers_considered: int

    distance_score: float
    performance_score: float
    load_score: float
    zone_score: float
    final_score: float

    delivery_id: Optional[str] = None
    recorded_at: datetime = field(default_factory=datetime.utcnow)
