"""
Purpose: Central configuration for driver search, assignment and batch pacing.
What it does:

Stores all tunable thresholds/caps for assigning an order:

MAX_SEARCH_RADIUS_KM = 10
MAX_DRIVERS_TO_NOTIFY = 5   (winner + 4 alternates)
BATCH_PAUSE_SECONDS = 0.1
MAX_ACTIVE_DELIVERIES = 5

Values can be overridden from the environment (.env supported):
DISPATCH_SEARCH_RADIUS_KM, DISPATCH_MAX_DRIVERS_TO_NOTIFY,
DISPATCH_OFFER_TIMEOUT_SECONDS, DISPATCH_BATCH_PAUSE_SECONDS,
DISPATCH_MAX_ACTIVE_DELIVERIES, DISPATCH_TRAFFIC_FACTOR

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv


@dataclass(frozen=True)
class DispatchPolicy:
    """
    Central configuration for the assignment engine and batch scheduler.
    """

    # --- Candidate search ---
    # Straight-line radius around the pickup within which couriers are considered.
    max_search_radius_km: float = 10.0

    # --- Offers ---
    # Winner plus ranked alternates returned for re-offer if the winner declines.
    max_drivers_to_notify: int = 5

    # How long a courier has to respond to an offer (consumed by the offer flow).
    offer_timeout_seconds: int = 60

    # --- Batch pacing ---
    # Pause between consecutive assignments in a batch so load reads catch up.
    batch_pause_seconds: float = 0.1

    # --- Capacity ---
    # Hard cap on concurrent deliveries per courier, enforced while reserving.
    max_active_deliveries: int = 5

    # --- Travel time ---
    # 1.0 = no traffic signal. >1 slows the ETA estimate.
    traffic_factor: float = 1.0

    @property
    def max_alternatives(self) -> int:
        return self.max_drivers_to_notify - 1

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.max_search_radius_km <= 0:
            raise ValueError("max_search_radius_km must be > 0")

        if self.max_drivers_to_notify < 1:
            raise ValueError("max_drivers_to_notify must be >= 1")

        if self.offer_timeout_seconds <= 0:
            raise ValueError("offer_timeout_seconds must be > 0")

        if self.batch_pause_seconds < 0:
            raise ValueError("batch_pause_seconds must be >= 0")

        if self.max_active_deliveries < 1:
            raise ValueError("max_active_deliveries must be >= 1")

        if self.traffic_factor <= 0:
            raise ValueError("traffic_factor must be > 0")


def default_dispatch_policy() -> DispatchPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DispatchPolicy()
    p.validate()
    return p


def policy_from_env(base: DispatchPolicy | None = None) -> DispatchPolicy:
    """
    Builds a policy from DISPATCH_* environment variables (and a .env file if present).
    Unset variables keep the value from `base`.
    """
    load_dotenv()
    base = base or DispatchPolicy()

    overrides = {}

    radius = os.getenv("DISPATCH_SEARCH_RADIUS_KM")
    if radius:
        overrides["max_search_radius_km"] = float(radius)

    notify = os.getenv("DISPATCH_MAX_DRIVERS_TO_NOTIFY")
    if notify:
        overrides["max_drivers_to_notify"] = int(notify)

    offer_timeout = os.getenv("DISPATCH_OFFER_TIMEOUT_SECONDS")
    if offer_timeout:
        overrides["offer_timeout_seconds"] = int(offer_timeout)

    pause = os.getenv("DISPATCH_BATCH_PAUSE_SECONDS")
    if pause:
        overrides["batch_pause_seconds"] = float(pause)

    cap = os.getenv("DISPATCH_MAX_ACTIVE_DELIVERIES")
    if cap:
        overrides["max_active_deliveries"] = int(cap)

    traffic = os.getenv("DISPATCH_TRAFFIC_FACTOR")
    if traffic:
        overrides["traffic_factor"] = float(traffic)

    p = replace(base, **overrides)
    p.validate()
    return p
