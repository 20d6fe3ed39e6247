"""
Purpose: Per-driver exclusive locks for "select winner + increment load".
What it does:
Two orders assigned at the same time can both read the same low load for a
courier. The engine closes that race by holding the courier's lock while it
re-reads the live load, checks the cap and creates the delivery.

The in-process manager below uses threading locks. A multi-process deployment
plugs in a distributed lock with the same `lock(key)` context manager shape.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Protocol

from orders.models import Delivery


class LockManager(Protocol):
    def lock(self, key: str):
        ...


class DriverLockManager:
    """
    One re-entrant lock per key, created on first use.

    Locks are kept for the life of the manager, so the registry holds at most
    one entry per courier ever reserved (bounded by fleet size). Reusing the
    same lock object per key is what makes concurrent reservations exclusive.
    """
    def __init__(self, timeout_seconds: Optional[float] = None):
        self.timeout_seconds = timeout_seconds
        self._registry_lock = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def _lock_for(self, key: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def lock(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        timeout = -1 if self.timeout_seconds is None else self.timeout_seconds
        if not lock.acquire(timeout=timeout):
            raise TimeoutError(f"Timed out waiting for lock '{key}'")
        try:
            yield
        finally:
            lock.release()


class DriverReservation:
    """
    Atomically commits a courier to an order if they are still under the cap.
    """
    def __init__(self, store, lock_manager: LockManager, max_active_deliveries: int):
        self.store = store
        self.lock_manager = lock_manager
        self.max_active_deliveries = max_active_deliveries

    def try_reserve(self, driver_id: str, order_id: str) -> Optional[Delivery]:
        """
        Returns the created delivery, or None if the courier is already at capacity.
        """
        with self.lock_manager.lock(f"driver_{driver_id}"):
            # Fresh read under the lock; the candidate snapshot may be stale by now.
            active = self.store.count_active_deliveries(driver_id)
            if active >= self.max_active_deliveries:
                return None

            return self.store.create_delivery(order_id, driver_id)

    def release(self, delivery: Delivery) -> None:
        with self.lock_manager.lock(f"driver_{delivery.driver_id}"):
            self.store.cancel_delivery(delivery.delivery_id)
