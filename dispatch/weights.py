"""
Purpose: Relative importance of each scoring factor.
What it does:
Holds the four factor weights of one engine instance and keeps them normalized,
so the weighted final score is always a convex combination of the components.

Weights are tunable at runtime (A/B tests, offline optimisation). Every engine
owns its own WeightConfig; there is no process-wide instance.
"""

from __future__ import annotations

import math
import threading
from typing import NamedTuple, Optional

DEFAULT_DISTANCE_WEIGHT = 0.40
DEFAULT_PERFORMANCE_WEIGHT = 0.25
DEFAULT_LOAD_WEIGHT = 0.20
DEFAULT_ZONE_WEIGHT = 0.15


class Weights(NamedTuple):
    distance: float
    performance: float
    load: float
    zone: float


DEFAULT_WEIGHTS = Weights(
    distance=DEFAULT_DISTANCE_WEIGHT,
    performance=DEFAULT_PERFORMANCE_WEIGHT,
    load=DEFAULT_LOAD_WEIGHT,
    zone=DEFAULT_ZONE_WEIGHT,
)


def normalize(weights: Weights) -> Weights:
    """
    Rescales the weights so they sum to 1.0.
    """
    for name, value in weights._asdict().items():
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"{name} weight must be a finite number >= 0, got {value}")

    total = sum(weights)
    if total <= 0:
        raise ValueError("At least one weight must be > 0")

    return Weights(*(value / total for value in weights))


class WeightConfig:
    """
    Thread-safe holder for the current weights.

    Readers take a snapshot() once per assignment so a concurrent set_weights()
    never mixes old and new values within a single scoring pass.
    """
    def __init__(self, weights: Optional[Weights] = None):
        self._lock = threading.Lock()
        self._weights = normalize(weights or DEFAULT_WEIGHTS)

    def snapshot(self) -> Weights:
        with self._lock:
            return self._weights

    def set_weights(
        self,
        distance: Optional[float] = None,
        performance: Optional[float] = None,
        load: Optional[float] = None,
        zone: Optional[float] = None,
    ) -> Weights:
        """
        Updates only the supplied weights, then renormalizes all four.

        set_weights(distance=1.0) with defaults 0.40/0.25/0.20/0.15 gives
        1.0/1.6 = 0.625 for distance and the others scaled by the same 1/1.6.
        """
        with self._lock:
            current = self._weights
            updated = Weights(
                distance=current.distance if distance is None else distance,
                performance=current.performance if performance is None else performance,
                load=current.load if load is None else load,
                zone=current.zone if zone is None else zone,
            )
            self._weights = normalize(updated)
            return self._weights

    def reset(self) -> Weights:
        with self._lock:
            self._weights = normalize(DEFAULT_WEIGHTS)
            return self._weights

    @property
    def distance(self) -> float:
        return self.snapshot().distance

    @property
    def performance(self) -> float:
        return self.snapshot().performance

    @property
    def load(self) -> float:
        return self.snapshot().load

    @property
    def zone(self) -> float:
        return self.snapshot().zone
