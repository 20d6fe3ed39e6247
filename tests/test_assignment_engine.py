import pytest

from dispatch.engine import AT_CAPACITY_REASON, NO_DRIVERS_REASON, AssignmentEngine
from dispatch.models import AssignmentAlgorithm
from dispatch.policy import DispatchPolicy
from drivers.directory import InMemoryDriverDirectory
from drivers.models import DriverProfile
from orders.store import InMemoryOrderStore
from routing.zones import BoundingBoxZoneResolver, ZoneBox

from conftest import make_driver, make_order


@pytest.fixture
def mixed_drivers():
    """
    - 'nearby_weak': on top of the pickup, poor stats, 4 active jobs, out of zone
    - 'strong': ~1.5 km away, great stats, idle, in zone
    - 'idle_far': ~8 km away, average stats, idle
    """
    return [
        make_driver("nearby_weak", 17.40, 78.47, rating=2.0, completion_rate=50.0, on_time_rate=50.0,
                    current_zone="east", home_zone="west"),
        make_driver("strong", 17.41, 78.48, rating=4.8),
        make_driver("idle_far", 17.472, 78.47, rating=3.8, completion_rate=80.0, on_time_rate=75.0),
    ]


@pytest.fixture
def mixed_engine(build_engine, store, mixed_drivers):
    store.seed_active_deliveries("nearby_weak", 4)
    return build_engine(mixed_drivers)


def test_smart_routing_picks_highest_final_score(mixed_engine):
    result = mixed_engine.assign_order(make_order(), "smart_routing")

    assert result.success
    assert result.assigned_driver_id == "strong"
    assert result.algorithm == "smart_routing"
    alternative_scores = [score.final_score for score in result.alternative_drivers]
    assert all(result.score.final_score >= value for value in alternative_scores)


def test_nearest_ignores_quality(mixed_engine):
    result = mixed_engine.assign_order(make_order(), AssignmentAlgorithm.NEAREST)

    assert result.success
    assert result.assigned_driver_id == "nearby_weak"
    assert result.score.estimated_distance_km == pytest.approx(0.0)
    # nearest winner is not the best-scored driver
    assert any(alt.final_score > result.score.final_score for alt in result.alternative_drivers)
    assert all(alt.estimated_distance_km >= result.score.estimated_distance_km for alt in result.alternative_drivers)


def test_load_balancing_picks_fewest_active_then_best_score(mixed_engine, store):
    store.seed_active_deliveries("strong", 1)

    result = mixed_engine.assign_order(make_order(), "load_balancing")

    # 'idle_far' is the only driver with zero active deliveries
    assert result.assigned_driver_id == "idle_far"
    assert result.score.active_deliveries == 0


def test_load_balancing_tie_goes_to_higher_final_score(mixed_engine):
    # 'strong' and 'idle_far' are both idle; 'strong' scores higher
    result = mixed_engine.assign_order(make_order(), "load_balancing")

    assert result.assigned_driver_id == "strong"
    assert [alt.driver_id for alt in result.alternative_drivers] == ["idle_far", "nearby_weak"]


def test_ml_based_matches_smart_routing(build_engine, mixed_drivers, store):
    store.seed_active_deliveries("nearby_weak", 4)

    ml_result = build_engine(mixed_drivers).assign_order(make_order("o-ml"), "ml_based")
    smart_store = InMemoryOrderStore()
    smart_store.seed_active_deliveries("nearby_weak", 4)
    smart_engine = AssignmentEngine(
        InMemoryDriverDirectory(mixed_drivers),
        smart_store,
        zone_resolver=BoundingBoxZoneResolver(default_zone="central"),
    )
    smart_result = smart_engine.assign_order(make_order("o-smart"), "smart_routing")

    assert ml_result.algorithm == "ml_based"
    assert ml_result.assigned_driver_id == smart_result.assigned_driver_id
    assert ml_result.score == smart_result.score
    assert ml_result.alternative_drivers == smart_result.alternative_drivers


def test_two_driver_scenario_exact_scores(build_engine, store):
    """
    Order at (17.40, 78.47).
    X at (17.41, 78.48): ~1.537 km, rating 4.8, idle.
    Y on top of the pickup: rating 3.5, 3 active deliveries.

    X: 0.4*exp(-1.537/5) + 0.25*0.939 + 0.2*1.0       + 0.15*1.0 = 0.8789
    Y: 0.4*1.0           + 0.25*0.835 + 0.2*exp(-1.5) + 0.15*1.0 = 0.8034
    """
    store.seed_active_deliveries("Y", 3)
    engine = build_engine([
        make_driver("X", 17.41, 78.48, rating=4.8, completion_rate=95.0, on_time_rate=90.0),
        make_driver("Y", 17.40, 78.47, rating=3.5, completion_rate=95.0, on_time_rate=90.0),
    ])

    result = engine.assign_order(make_order())

    assert result.success
    assert result.assigned_driver_id == "X"
    assert round(result.score.final_score, 2) == 0.88
    assert result.score.estimated_minutes == 4

    (runner_up,) = result.alternative_drivers
    assert runner_up.driver_id == "Y"
    assert round(runner_up.final_score, 2) == 0.80
    assert runner_up.distance_score == 1.0
    assert runner_up.load_score == pytest.approx(0.2231, abs=1e-4)


def test_no_drivers_in_range_is_a_failure_not_an_exception(build_engine):
    engine = build_engine([make_driver("far_away", 17.60, 78.47)])  # ~22 km

    result = engine.assign_order(make_order())

    assert result.success is False
    assert result.failure_reason == NO_DRIVERS_REASON
    assert result.assigned_driver_id is None


def test_empty_directory(build_engine):
    result = build_engine([]).assign_order(make_order())
    assert not result.success
    assert result.failure_reason == NO_DRIVERS_REASON


def test_alternatives_capped_at_four(build_engine):
    drivers = [make_driver(f"d{i}", 17.40 + i * 0.002, 78.47) for i in range(8)]
    result = build_engine(drivers).assign_order(make_order())

    assert result.success
    assert len(result.alternative_drivers) == 4
    assert result.assigned_driver_id not in [alt.driver_id for alt in result.alternative_drivers]


def test_assignment_is_recorded_in_ledger(build_engine, store):
    engine = build_engine([make_driver("a", 17.401, 78.47), make_driver("b", 17.43, 78.47)], max_search_radius_km=7.5)

    result = engine.assign_order(make_order("order-42"), "nearest")

    (record,) = store.ledger()
    assert record.order_id == "order-42"
    assert record.algorithm == "nearest"
    assert record.assigned_driver_id == result.assigned_driver_id == "a"
    assert record.search_radius_km == 7.5
    assert record.drivers_considered == 2
    assert record.final_score == result.score.final_score
    assert record.distance_score == result.score.distance_score
    assert record.zone_score == result.score.zone_score
    assert record.delivery_id == result.delivery_id

    # the winner's load went up by one
    assert store.count_active_deliveries("a") == 1


def test_zone_resolver_drives_zone_score(build_engine):
    resolver = BoundingBoxZoneResolver([ZoneBox("banjara", 17.39, 78.46, 17.42, 78.49)])
    engine = build_engine(
        [
            make_driver("local", 17.405, 78.475, current_zone="banjara", home_zone="banjara"),
            make_driver("home", 17.405, 78.475, current_zone="kukatpally", home_zone="banjara"),
            make_driver("stranger", 17.405, 78.475, current_zone="kukatpally", home_zone="uppal"),
        ],
        zone_resolver=resolver,
    )

    result = engine.assign_order(make_order())
    zone_scores = {score.driver_id: score.zone_score for score in (result.score, *result.alternative_drivers)}

    assert zone_scores == {"local": 1.0, "home": 0.8, "stranger": 0.5}
    assert result.assigned_driver_id == "local"


def test_set_weights_changes_subsequent_assignments(mixed_engine):
    assert mixed_engine.assign_order(make_order("o1")).assigned_driver_id == "strong"

    mixed_engine.set_weights(distance=1.0, performance=0.0, load=0.0, zone=0.0)

    assert mixed_engine.assign_order(make_order("o2")).assigned_driver_id == "nearby_weak"


def test_engines_do_not_share_weights(build_engine, mixed_drivers):
    first = build_engine(mixed_drivers)
    second = build_engine(mixed_drivers)

    first.set_weights(distance=1.0, performance=0.0, load=0.0, zone=0.0)

    assert second.weights.snapshot().distance == pytest.approx(0.40)


def test_unknown_algorithm_returns_failure(mixed_engine, store):
    result = mixed_engine.assign_order(make_order(), "random_pick")

    assert not result.success
    assert "random_pick" in result.failure_reason
    assert store.ledger() == []


def test_directory_failure_is_converted_to_result(store):
    class BrokenDirectory:
        def list_eligible_drivers(self):
            raise ConnectionError("driver directory unreachable")

    engine = AssignmentEngine(BrokenDirectory(), store)

    result = engine.assign_order(make_order())

    assert not result.success
    assert result.failure_reason == "Assignment failed: driver directory unreachable"


def test_ledger_failure_rolls_back_reservation():
    class LedgerDownStore(InMemoryOrderStore):
        def record_assignment(self, record):
            raise RuntimeError("ledger write timed out")

    store = LedgerDownStore()
    engine = AssignmentEngine(
        InMemoryDriverDirectory([make_driver("a", 17.40, 78.47)]),
        store,
    )

    result = engine.assign_order(make_order())

    assert not result.success
    assert "ledger write timed out" in result.failure_reason
    # the order is not left half-assigned
    assert store.count_active_deliveries("a") == 0
    (delivery,) = store.deliveries_for_driver("a")
    assert delivery.status.value == "cancelled"


def test_driver_at_capacity_is_skipped(build_engine, store):
    store.seed_active_deliveries("best", 2)
    engine = build_engine(
        [make_driver("best", 17.40, 78.47, rating=5.0), make_driver("backup", 17.43, 78.47, rating=3.0)],
        max_active_deliveries=2,
    )

    result = engine.assign_order(make_order())

    assert result.assigned_driver_id == "backup"


def test_driver_at_capacity_is_not_offered_as_alternate(build_engine, store):
    store.seed_active_deliveries("full", 2)
    engine = build_engine(
        [make_driver("full", 17.40, 78.47, rating=5.0), make_driver("ok", 17.43, 78.47, rating=3.0)],
        max_active_deliveries=2,
    )

    result = engine.assign_order(make_order())

    assert result.assigned_driver_id == "ok"
    assert "full" not in [alt.driver_id for alt in result.alternative_drivers]
    assert store.count_active_deliveries("full") == 2


def test_unzoned_drivers_get_neutral_zone_score_with_default_resolver(store):
    directory = InMemoryDriverDirectory([DriverProfile.new("z", "Zed", 17.40, 78.47)])
    engine = AssignmentEngine(directory, store, policy=DispatchPolicy(batch_pause_seconds=0))

    result = engine.assign_order(make_order())

    assert result.success
    assert result.score.zone_score == 0.5


def test_everyone_at_capacity(build_engine, store):
    store.seed_active_deliveries("only", 1)
    engine = build_engine([make_driver("only", 17.40, 78.47)], max_active_deliveries=1)

    result = engine.assign_order(make_order())

    assert not result.success
    assert result.failure_reason == AT_CAPACITY_REASON


def test_invalid_policy_rejected(store):
    with pytest.raises(ValueError):
        AssignmentEngine(InMemoryDriverDirectory(), store, policy=DispatchPolicy(max_search_radius_km=0))
