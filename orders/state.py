from datetime import datetime
from orders.models import Delivery, DeliveryStatus

class DeliveryStateException(Exception):
    """Raised when an invalid delivery transition is attempted."""
    pass

# Allowed forward moves. Delivered and cancelled are terminal.
ALLOWED_TRANSITIONS = {
    DeliveryStatus.PENDING: {DeliveryStatus.ASSIGNED, DeliveryStatus.CANCELLED},
    DeliveryStatus.ASSIGNED: {DeliveryStatus.PICKED_UP, DeliveryStatus.CANCELLED},
    DeliveryStatus.PICKED_UP: {DeliveryStatus.IN_TRANSIT, DeliveryStatus.CANCELLED},
    DeliveryStatus.IN_TRANSIT: {DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED},
    DeliveryStatus.DELIVERED: set(),
    DeliveryStatus.CANCELLED: set(),
}

def can_transition(current: DeliveryStatus, new_status: DeliveryStatus) -> bool:
    return new_status in ALLOWED_TRANSITIONS[current]

def transition_delivery(delivery: Delivery, new_status, now: datetime = None) -> Delivery:
    """
    Moves a delivery to `new_status`, stamping pickup/delivery times.
    Once a delivery is delivered or cancelled it no longer counts towards the courier's load.
    """
    if isinstance(new_status, str):
        new_status = DeliveryStatus(new_status)

    if not can_transition(delivery.status, new_status):
        raise DeliveryStateException(
            f"Cannot move delivery {delivery.delivery_id} from {delivery.status.value} to {new_status.value}"
        )

    now = now or datetime.utcnow()
    delivery.status = new_status

    if new_status == DeliveryStatus.PICKED_UP:
        delivery.picked_up_at = now
    elif new_status == DeliveryStatus.DELIVERED:
        delivery.delivered_at = now

    return delivery
