import pytest

from dispatch.engine import AssignmentEngine
from dispatch.policy import DispatchPolicy
from drivers.directory import InMemoryDriverDirectory
from drivers.models import DriverProfile
from orders.models import OrderLocation
from orders.store import InMemoryOrderStore
from routing.zones import BoundingBoxZoneResolver

PICKUP = (17.40, 78.47)


def make_driver(driver_id, lat, lng, **overrides):
    """
    Eligible, verified courier in the 'central' zone unless overridden.
    """
    stats = {
        "rating": 4.5,
        "completion_rate": 95.0,
        "on_time_rate": 90.0,
        "acceptance_rate": 85.0,
        "total_deliveries": 250,
        "current_zone": "central",
        "home_zone": "central",
    }
    stats.update(overrides)
    return DriverProfile.new(driver_id, f"Courier {driver_id}", lat, lng, **stats)


def make_order(order_id="order-1", priority="normal", pickup=PICKUP):
    return OrderLocation.new(
        order_id,
        pickup[0],
        pickup[1],
        pickup[0] + 0.02,
        pickup[1] + 0.02,
        priority=priority,
        estimated_prep_minutes=15,
        order_value=450.0,
    )


@pytest.fixture
def pickup_location():
    return PICKUP


@pytest.fixture
def store():
    return InMemoryOrderStore()


@pytest.fixture
def build_engine(store):
    """
    Factory: build_engine(drivers, **policy_overrides) -> AssignmentEngine.
    Orders resolve to the 'central' zone; batch pauses are disabled.
    """
    def _build(drivers, zone_resolver=None, **policy_overrides):
        policy_overrides.setdefault("batch_pause_seconds", 0)
        return AssignmentEngine(
            InMemoryDriverDirectory(drivers),
            store,
            zone_resolver=zone_resolver or BoundingBoxZoneResolver(default_zone="central"),
            policy=DispatchPolicy(**policy_overrides),
        )
    return _build
