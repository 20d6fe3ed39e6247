"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Accepts an OrderLocation from the order pipeline, pulls the candidate pool,
scores every candidate, ranks them with the selected algorithm, atomically
reserves the best courier that still has capacity, writes the decision to the
assignment ledger and returns an AssignmentResult.

Failures (no supply, collaborator errors) come back as failed results; nothing
is raised to the caller.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from drivers.directory import DriverDirectory
from drivers.selection import CandidateProvider
from orders.models import AssignmentRecord, OrderLocation
from orders.store import OrderStore
from routing.zones import BoundingBoxZoneResolver, ZoneResolver

from .models import AssignmentAlgorithm, AssignmentResult, AssignmentScore
from .policy import DispatchPolicy, default_dispatch_policy
from .reservation import DriverLockManager, DriverReservation, LockManager
from .scoring import rank_candidates
from .weights import WeightConfig, Weights

logger = logging.getLogger(__name__)

NO_DRIVERS_REASON = "No available drivers in range"
AT_CAPACITY_REASON = "All candidate drivers are at capacity"


def order_by_algorithm(scores: List[AssignmentScore], algorithm: AssignmentAlgorithm) -> List[AssignmentScore]:
    """
    Returns the offer sequence for an algorithm. `scores` must already be
    ranked by final score (best first); sorts below are stable, so equal keys
    keep that order.
    """
    if algorithm == AssignmentAlgorithm.NEAREST:
        return sorted(scores, key=lambda score: score.estimated_distance_km)

    if algorithm == AssignmentAlgorithm.LOAD_BALANCING:
        return sorted(scores, key=lambda score: score.active_deliveries)

    # SMART_ROUTING, and ML_BASED until a learned model exists.
    return list(scores)


class AssignmentEngine:
    """
    Selects the courier for one order at a time.

    One instance per deployment (or per test); weights and policy are owned by
    the instance, never global.
    """
    def __init__(
        self,
        directory: DriverDirectory,
        store: OrderStore,
        *,
        zone_resolver: Optional[ZoneResolver] = None,
        weights: Optional[WeightConfig] = None,
        policy: Optional[DispatchPolicy] = None,
        lock_manager: Optional[LockManager] = None,
    ):
        self.store = store
        self.policy = policy or default_dispatch_policy()
        self.policy.validate()

        self.candidate_provider = CandidateProvider(directory, store)
        self.zone_resolver = zone_resolver or BoundingBoxZoneResolver()
        self.weights = weights or WeightConfig()
        self.reservation = DriverReservation(
            store,
            lock_manager or DriverLockManager(),
            max_active_deliveries=self.policy.max_active_deliveries,
        )

    def set_weights(self, **weights: float) -> Weights:
        """
        Tune factor weights at runtime; applies to every subsequent assignment.
        """
        return self.weights.set_weights(**weights)

    def assign_order(self, order: OrderLocation, algorithm: str | AssignmentAlgorithm = AssignmentAlgorithm.SMART_ROUTING) -> AssignmentResult:
        """
        Find, reserve and record the best courier for `order`.
        """
        try:
            algorithm = AssignmentAlgorithm(algorithm)
        except ValueError:
            logger.warning(f"Order {order.order_id}: unknown assignment algorithm {algorithm!r}")
            return AssignmentResult.failed(order.order_id, f"Unknown assignment algorithm: {algorithm}")

        try:
            return self._assign(order, algorithm)
        except Exception as e:
            logger.exception(f"Order assignment error for order {order.order_id}")
            return AssignmentResult.failed(order.order_id, f"Assignment failed: {e}", algorithm=algorithm.value)

    def _assign(self, order: OrderLocation, algorithm: AssignmentAlgorithm) -> AssignmentResult:
        radius = self.policy.max_search_radius_km

        # 1. Candidate pool
        candidates = self.candidate_provider.find_candidates(order.pickup, radius)
        if not candidates:
            logger.info(f"Order {order.order_id}: no available drivers within {radius} km")
            return AssignmentResult.failed(order.order_id, NO_DRIVERS_REASON, algorithm=algorithm.value)

        # 2. Score everyone against one consistent set of weights
        weights = self.weights.snapshot()
        order_zone = self.zone_resolver.resolve(*order.pickup)
        ranked = rank_candidates(candidates, order_zone, weights, self.policy.traffic_factor)

        if algorithm == AssignmentAlgorithm.ML_BASED:
            logger.debug(f"Order {order.order_id}: ml_based is not implemented, ranking with smart_routing")

        offer_sequence = order_by_algorithm(ranked, algorithm)

        # 3. Reserve the first courier in the sequence who is still under the cap
        winner: Optional[AssignmentScore] = None
        delivery = None
        at_capacity = set()
        for score in offer_sequence:
            delivery = self.reservation.try_reserve(score.driver_id, order.order_id)
            if delivery is not None:
                winner = score
                break
            at_capacity.add(score.driver_id)
            logger.info(f"Order {order.order_id}: driver {score.driver_id} reached capacity, trying next")

        if winner is None:
            return AssignmentResult.failed(order.order_id, AT_CAPACITY_REASON, algorithm=algorithm.value)

        # 4. Ledger. If it can't be written, undo the reservation so the order stays unassigned.
        record = AssignmentRecord(
            order_id=order.order_id,
            algorithm=algorithm.value,
            assigned_driver_id=winner.driver_id,
            search_radius_km=radius,
            drivers_considered=len(candidates),
            distance_score=winner.distance_score,
            performance_score=winner.performance_score,
            load_score=winner.load_score,
            zone_score=winner.zone_score,
            final_score=winner.final_score,
            delivery_id=delivery.delivery_id,
        )
        try:
            self.store.record_assignment(record)
        except Exception:
            self.reservation.release(delivery)
            raise

        # Couriers rejected for capacity are not offered as fallbacks.
        alternatives = [
            score for score in offer_sequence
            if score.driver_id != winner.driver_id and score.driver_id not in at_capacity
        ]
        alternatives = alternatives[: self.policy.max_alternatives]

        logger.info(
            f"Order {order.order_id} assigned to {winner.driver_id} via {algorithm.value} "
            f"(score {winner.final_score:.3f}, {winner.estimated_distance_km:.2f} km, {len(candidates)} candidates)"
        )

        return AssignmentResult.succeeded(
            order.order_id,
            algorithm.value,
            winner,
            tuple(alternatives),
            delivery_id=delivery.delivery_id,
        )
