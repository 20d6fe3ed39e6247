"""
Orders domain package.

Public API:
- Domain models: OrderLocation, OrderPriority, Delivery, DeliveryStatus, AssignmentRecord
- Store: OrderStore, InMemoryOrderStore
- Fare helper: calculate_delivery_fare

Should not contain business logic.
"""
from .models import OrderLocation, OrderPriority, Delivery, DeliveryStatus, AssignmentRecord
from .store import OrderStore, InMemoryOrderStore, DeliveryNotFoundError
from .fare import calculate_delivery_fare, FareBreakdown, FareTariff

__all__ = ["OrderLocation",
           "OrderPriority",
             "Delivery",
               "DeliveryStatus",
               "AssignmentRecord",
               "OrderStore",
               "InMemoryOrderStore",
               "DeliveryNotFoundError",
               "calculate_delivery_fare",
               "FareBreakdown",
               "FareTariff",
               ]
