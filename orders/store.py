"""
Purpose: The order/delivery store collaborator and the assignment ledger.
What it does:
- Declares what the assignment engine needs from the delivery store:
   - count_active_deliveries(driver_id)
   - create_delivery(order_id, driver_id)
   - cancel_delivery(delivery_id)
   - record_assignment(record)

- Ships InMemoryOrderStore, a thread-safe implementation used by the tests and
  the simulation script. It owns the delivery records (what drives courier load)
  and the append-only ledger.

Rule: Store owns state transitions, the engine owns the decision.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from .models import AssignmentRecord, Delivery, DeliveryStatus
from .state import transition_delivery


class DeliveryNotFoundError(KeyError):
    """Raised when a delivery id is not known to the store."""
    pass


class OrderStore(Protocol):
    def count_active_deliveries(self, driver_id: str) -> int:
        ...

    def create_delivery(self, order_id: str, driver_id: str) -> Delivery:
        ...

    def cancel_delivery(self, delivery_id: str) -> None:
        ...

    def record_assignment(self, record: AssignmentRecord) -> None:
        ...


@dataclass
class StoreStats:
    active_deliveries: int
    total_deliveries: int
    ledger_size: int
    now: datetime = field(default_factory=datetime.utcnow)


@dataclass
class InMemoryOrderStore:
    """
    In-memory delivery store + ledger.
    """
    _deliveries: Dict[str, Delivery] = field(default_factory=dict)  # all deliveries by id
    _ledger: List[AssignmentRecord] = field(default_factory=list)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    # --- OrderStore API ---

    def count_active_deliveries(self, driver_id: str) -> int:
        with self._lock:
            return sum(
                1 for delivery in self._deliveries.values()
                if delivery.driver_id == driver_id and delivery.is_active
            )

    def create_delivery(self, order_id: str, driver_id: str) -> Delivery:
        """
        Commits a courier to an order (status ASSIGNED), raising their load by one.
        """
        delivery = Delivery.new(order_id, driver_id)
        with self._lock:
            self._deliveries[delivery.delivery_id] = delivery
        return delivery

    def cancel_delivery(self, delivery_id: str) -> None:
        self.update_delivery_status(delivery_id, DeliveryStatus.CANCELLED)

    def record_assignment(self, record: AssignmentRecord) -> None:
        with self._lock:
            self._ledger.append(record)

    # --- Extra helpers ---

    def get_delivery(self, delivery_id: str) -> Delivery:
        with self._lock:
            delivery = self._deliveries.get(delivery_id)
        if delivery is None:
            raise DeliveryNotFoundError(delivery_id)
        return delivery

    def update_delivery_status(self, delivery_id: str, status, now: Optional[datetime] = None) -> Delivery:
        with self._lock:
            delivery = self.get_delivery(delivery_id)
            return transition_delivery(delivery, status, now=now)

    def deliveries_for_driver(self, driver_id: str, active_only: bool = False) -> List[Delivery]:
        with self._lock:
            return [
                delivery for delivery in self._deliveries.values()
                if delivery.driver_id == driver_id and (delivery.is_active or not active_only)
            ]

    def seed_active_deliveries(self, driver_id: str, count: int) -> List[Delivery]:
        """
        Gives a courier `count` deliveries already in progress (tests and simulations).
        """
        return [self.create_delivery(f"seed-{driver_id}-{index}", driver_id) for index in range(count)]

    def ledger(self) -> List[AssignmentRecord]:
        with self._lock:
            return list(self._ledger)

    def stats(self) -> StoreStats:
        with self._lock:
            return StoreStats(
                active_deliveries=sum(1 for delivery in self._deliveries.values() if delivery.is_active),
                total_deliveries=len(self._deliveries),
                ledger_size=len(self._ledger),
                now=datetime.utcnow(),
            )
