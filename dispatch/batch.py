"""
Purpose: Assign a group of orders that arrived together.
What it does:
Orders the batch by priority (urgent > high > normal, first-come-first-served
within a tier) and runs the assignment engine on each order strictly one after
another, pausing between calls so the next load read sees the previous
assignment. One result per order; a failed order never stops the batch.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional

from orders.models import OrderLocation

from .engine import AssignmentEngine
from .models import AssignmentAlgorithm, AssignmentResult

logger = logging.getLogger(__name__)


def processing_order(orders: Iterable[OrderLocation]) -> List[OrderLocation]:
    """
    Highest priority first. sorted() is stable, so arrival order is kept inside a tier.
    """
    return sorted(orders, key=lambda order: order.priority.rank, reverse=True)


class BatchScheduler:
    def __init__(
        self,
        engine: AssignmentEngine,
        *,
        pause_seconds: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.engine = engine
        self.pause_seconds = engine.policy.batch_pause_seconds if pause_seconds is None else pause_seconds
        self.sleep = sleep

    def assign_batch(self, orders: Iterable[OrderLocation]) -> Dict[str, AssignmentResult]:
        """
        Returns order_id -> result, in processing order.
        """
        results: Dict[str, AssignmentResult] = {}
        sorted_orders = processing_order(orders)

        for index, order in enumerate(sorted_orders):
            if index > 0 and self.pause_seconds > 0:
                self.sleep(self.pause_seconds)

            result = self.engine.assign_order(order, AssignmentAlgorithm.SMART_ROUTING)
            results[order.order_id] = result

            if not result.success:
                logger.warning(f"Batch: order {order.order_id} ({order.priority.value}) unassigned: {result.failure_reason}")

        assigned = sum(1 for result in results.values() if result.success)
        logger.info(f"Batch complete: {assigned}/{len(results)} orders assigned")
        return results
