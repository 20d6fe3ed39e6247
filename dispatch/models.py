"""
Purpose: Data passed out of the assignment engine.
What it does:
Defines the selectable algorithms, the per-driver score and the result of one
assignment attempt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class AssignmentAlgorithm(str, Enum):
    NEAREST = "nearest"
    SMART_ROUTING = "smart_routing"
    LOAD_BALANCING = "load_balancing"
    # Reserved for a learned ranking model. Not implemented yet: ranks exactly
    # like SMART_ROUTING until a model is plugged in.
    ML_BASED = "ml_based"


@dataclass(frozen=True)
class AssignmentScore:
    """
    Engine verdict for one (order, driver) pair. Every score is in [0, 1].
    """
    driver_id: str
    distance_score: float
    performance_score: float
    load_score: float
    zone_score: float
    final_score: float
    estimated_minutes: int
    estimated_distance_km: float
    active_deliveries: int = 0


@dataclass(frozen=True)
class AssignmentResult:
    """
    Outcome of one assignment attempt. Failures are data, never exceptions.
    """
    success: bool
    order_id: str
    algorithm: Optional[str] = None
    assigned_driver_id: Optional[str] = None
    delivery_id: Optional[str] = None
    score: Optional[AssignmentScore] = None
    alternative_drivers: Tuple[AssignmentScore, ...] = ()
    failure_reason: Optional[str] = None

    @classmethod
    def succeeded(
        cls,
        order_id: str,
        algorithm: str,
        score: AssignmentScore,
        alternatives: Tuple[AssignmentScore, ...],
        delivery_id: Optional[str] = None,
    ) -> AssignmentResult:
        return cls(
            success=True,
            order_id=order_id,
            algorithm=algorithm,
            assigned_driver_id=score.driver_id,
            delivery_id=delivery_id,
            score=score,
            alternative_drivers=tuple(alternatives),
        )

    @classmethod
    def failed(cls, order_id: str, reason: str, algorithm: Optional[str] = None) -> AssignmentResult:
        return cls(success=False, order_id=order_id, algorithm=algorithm, failure_reason=reason)
