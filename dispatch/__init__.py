#Expose the high-level pipeline pieces:
#Scoring / ranking
#Assignment engine (the "one call" entry point for a single order)
#Batch scheduler (many orders, priority ordered)

from .models import AssignmentAlgorithm, AssignmentScore, AssignmentResult
from .weights import WeightConfig, Weights, DEFAULT_WEIGHTS
from .policy import DispatchPolicy, default_dispatch_policy, policy_from_env
from .scoring import rank_candidates, score_candidate
from .engine import AssignmentEngine #the main class to call to assign an order to a driver
from .batch import BatchScheduler, processing_order

__all__ = [
    "AssignmentAlgorithm",
    "AssignmentScore",
    "AssignmentResult",
    "WeightConfig",
    "Weights",
    "DEFAULT_WEIGHTS",
    "DispatchPolicy",
    "default_dispatch_policy",
    "policy_from_env",
    "rank_candidates",
    "score_candidate",
    "AssignmentEngine",
    "BatchScheduler",
    "processing_order",
]
