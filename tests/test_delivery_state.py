from datetime import datetime

import pytest

from orders.models import Delivery, DeliveryStatus
from orders.state import DeliveryStateException, can_transition, transition_delivery
from orders.store import DeliveryNotFoundError, InMemoryOrderStore


def test_happy_path_stamps_times():
    delivery = Delivery.new("o1", "d1")
    picked = datetime(2026, 1, 5, 12, 0)
    dropped = datetime(2026, 1, 5, 12, 25)

    transition_delivery(delivery, DeliveryStatus.PICKED_UP, now=picked)
    transition_delivery(delivery, "in_transit")
    transition_delivery(delivery, DeliveryStatus.DELIVERED, now=dropped)

    assert delivery.status == DeliveryStatus.DELIVERED
    assert delivery.picked_up_at == picked
    assert delivery.delivered_at == dropped
    assert not delivery.is_active


@pytest.mark.parametrize(
    "current,target",
    [
        (DeliveryStatus.ASSIGNED, DeliveryStatus.DELIVERED),
        (DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED),
        (DeliveryStatus.CANCELLED, DeliveryStatus.ASSIGNED),
        (DeliveryStatus.IN_TRANSIT, DeliveryStatus.PICKED_UP),
    ],
)
def test_invalid_transitions_raise(current, target):
    delivery = Delivery.new("o1", "d1")
    delivery.status = current

    assert not can_transition(current, target)
    with pytest.raises(DeliveryStateException):
        transition_delivery(delivery, target)


def test_store_load_follows_delivery_lifecycle():
    store = InMemoryOrderStore()
    first = store.create_delivery("o1", "d1")
    second = store.create_delivery("o2", "d1")
    assert store.count_active_deliveries("d1") == 2

    store.update_delivery_status(first.delivery_id, "picked_up")
    store.update_delivery_status(first.delivery_id, "in_transit")
    assert store.count_active_deliveries("d1") == 2

    store.update_delivery_status(first.delivery_id, "delivered")
    store.cancel_delivery(second.delivery_id)
    assert store.count_active_deliveries("d1") == 0

    stats = store.stats()
    assert stats.total_deliveries == 2
    assert stats.active_deliveries == 0


def test_unknown_delivery():
    with pytest.raises(DeliveryNotFoundError):
        InMemoryOrderStore().update_delivery_status("missing", "picked_up")
