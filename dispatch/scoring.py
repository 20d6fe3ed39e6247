#Purpose: Ranking/selection model (the "who is best" layer).
#Takes candidates (already eligible) + the order zone + current weights.
#Produces one AssignmentScore per candidate and a ranked list.
#Component scores (all in [0,1], higher is better):
#distance     exp(-km / 5)        1.0 at 0 km, ~0.5 at 3.5 km, ~0.1 at 11.5 km
#performance  rating/5, completion %, on-time % blended 0.4 / 0.3 / 0.3
#load         exp(-active / 2)    1.0 idle, ~0.1 at 4.6 active jobs
#zone         1.0 same zone, 0.8 order in home zone, 0.5 otherwise
#Acceptance rate and lifetime deliveries are carried on the candidate but not scored yet.

from __future__ import annotations

import math
from typing import Iterable, List

from drivers.models import DriverCandidate
from routing.geo import estimate_travel_minutes
from routing.zones import UNKNOWN_ZONE

from .models import AssignmentScore
from .weights import Weights

DISTANCE_DECAY_KM = 5.0
LOAD_DECAY_DELIVERIES = 2.0

RATING_WEIGHT = 0.4
COMPLETION_WEIGHT = 0.3
ON_TIME_WEIGHT = 0.3

SAME_ZONE_SCORE = 1.0
HOME_ZONE_SCORE = 0.8
NEUTRAL_ZONE_SCORE = 0.5


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def distance_score(distance_km: float) -> float:
    return math.exp(-max(distance_km, 0.0) / DISTANCE_DECAY_KM)


def performance_score(candidate: DriverCandidate) -> float:
    normalized_rating = candidate.rating / 5
    normalized_completion = candidate.completion_rate / 100
    normalized_on_time = candidate.on_time_rate / 100

    # Directory data is not trusted to be in range.
    return _clamp(
        RATING_WEIGHT * _clamp(normalized_rating)
        + COMPLETION_WEIGHT * _clamp(normalized_completion)
        + ON_TIME_WEIGHT * _clamp(normalized_on_time)
    )


def load_score(active_deliveries: int) -> float:
    return math.exp(-max(active_deliveries, 0) / LOAD_DECAY_DELIVERIES)


def zone_score(order_zone: str, driver_current_zone: str, driver_home_zone: str) -> float:
    # An unresolved order zone carries no affinity signal, even for unzoned drivers.
    if order_zone == UNKNOWN_ZONE:
        return NEUTRAL_ZONE_SCORE

    if driver_current_zone == order_zone:
        return SAME_ZONE_SCORE

    if driver_home_zone == order_zone:
        return HOME_ZONE_SCORE

    return NEUTRAL_ZONE_SCORE


def score_candidate(
    candidate: DriverCandidate,
    order_zone: str,
    weights: Weights,
    traffic_factor: float = 1.0,
) -> AssignmentScore:
    """
    Scores one candidate against an order. Distance is the straight-line km
    measured by the candidate provider.
    """
    distance = candidate.distance_to_pickup_km

    distance_component = distance_score(distance)
    performance_component = performance_score(candidate)
    load_component = load_score(candidate.active_deliveries)
    zone_component = zone_score(order_zone, candidate.current_zone, candidate.home_zone)

    final = (
        weights.distance * distance_component
        + weights.performance * performance_component
        + weights.load * load_component
        + weights.zone * zone_component
    )

    return AssignmentScore(
        driver_id=candidate.id,
        distance_score=distance_component,
        performance_score=performance_component,
        load_score=load_component,
        zone_score=zone_component,
        final_score=_clamp(final),
        estimated_minutes=estimate_travel_minutes(distance, traffic_factor),
        estimated_distance_km=distance,
        active_deliveries=candidate.active_deliveries,
    )


def rank_candidates(
    candidates: Iterable[DriverCandidate],
    order_zone: str,
    weights: Weights,
    traffic_factor: float = 1.0,
) -> List[AssignmentScore]:
    """
    Scores every candidate and sorts best first.
    Ties: closer driver first, then driver id (deterministic).
    """
    scores = [score_candidate(candidate, order_zone, weights, traffic_factor) for candidate in candidates]
    scores.sort(key=lambda score: (-score.final_score, score.estimated_distance_km, score.driver_id))
    return scores
