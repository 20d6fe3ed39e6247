"""
Purpose: Load courier profiles from a CSV export (simulations, fixtures).

Expected columns:
driver_id, name, lat, lng, rating, completion_rate, on_time_rate, acceptance_rate,
total_deliveries, vehicle_type, current_zone, home_zone,
is_online, is_available, status, verification_status

Missing lat/lng cells load as a driver with no known position.
"""

from __future__ import annotations

from typing import List

import pandas as pd

from .models import DriverProfile

REQUIRED_COLUMNS = ["driver_id", "lat", "lng"]


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def _optional_float(value):
    return None if pd.isna(value) else float(value)


def profiles_from_frame(df: pd.DataFrame) -> List[DriverProfile]:
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Driver CSV is missing columns: {', '.join(missing)}")

    drivers = []
    for _, row in df.iterrows():
        drivers.append(
            DriverProfile.new(
                str(row["driver_id"]),
                str(row.get("name", row["driver_id"])),
                _optional_float(row["lat"]),
                _optional_float(row["lng"]),
                status=str(row.get("status", "active")),
                verification_status=str(row.get("verification_status", "verified")),
                is_online=_as_bool(row.get("is_online", True)),
                is_available=_as_bool(row.get("is_available", True)),
                rating=float(row.get("rating", 0.0)),
                completion_rate=float(row.get("completion_rate", 0.0)),
                on_time_rate=float(row.get("on_time_rate", 0.0)),
                acceptance_rate=float(row.get("acceptance_rate", 0.0)),
                total_deliveries=int(row.get("total_deliveries", 0)),
                vehicle_type=str(row.get("vehicle_type", "bike")),
                current_zone=str(row.get("current_zone", "unknown")),
                home_zone=str(row.get("home_zone", "unknown")),
            )
        )
    return drivers


def load_driver_profiles(filepath: str) -> List[DriverProfile]:
    return profiles_from_frame(pd.read_csv(filepath))
