"""
Purpose: Load pending orders from a CSV export (simulations, fixtures).

Expected columns:
order_id, pickup_lat, pickup_lng, dropoff_lat, dropoff_lng
Optional: priority, estimated_prep_minutes, order_value, pickup_address, dropoff_address

Row order is arrival order, which the batch scheduler keeps within a priority tier.
"""

from __future__ import annotations

from typing import List

import pandas as pd

from .models import OrderLocation

REQUIRED_COLUMNS = ["order_id", "pickup_lat", "pickup_lng", "dropoff_lat", "dropoff_lng"]


def orders_from_frame(df: pd.DataFrame) -> List[OrderLocation]:
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Order CSV is missing columns: {', '.join(missing)}")

    df = df.fillna({"priority": "normal", "estimated_prep_minutes": 0, "order_value": 0.0,
                    "pickup_address": "", "dropoff_address": ""})

    orders = []
    for _, row in df.iterrows():
        orders.append(
            OrderLocation.new(
                str(row["order_id"]),
                float(row["pickup_lat"]),
                float(row["pickup_lng"]),
                float(row["dropoff_lat"]),
                float(row["dropoff_lng"]),
                priority=str(row.get("priority", "normal")).strip().lower(),
                estimated_prep_minutes=int(row.get("estimated_prep_minutes", 0)),
                order_value=float(row.get("order_value", 0.0)),
                pickup_address=str(row.get("pickup_address", "")),
                dropoff_address=str(row.get("dropoff_address", "")),
            )
        )
    return orders


def load_orders(filepath: str) -> List[OrderLocation]:
    return orders_from_frame(pd.read_csv(filepath))
